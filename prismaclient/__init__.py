"""Query building, raw queries, transactions and generator data models for a Prisma query engine client."""

__version__ = "0.1.0"