# Household API Services
