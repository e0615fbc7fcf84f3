# property_authz/core/database.py
from prisma import Prisma

# Global Prisma instance, connected in the application lifespan
prisma = Prisma()
