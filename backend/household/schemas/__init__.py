# Household API Schemas
