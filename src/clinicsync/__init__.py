"""clinicsync: clinic data synchronization and financial-reconciliation core."""

__version__ = "1.0.0"
