"""rdsguard - capability engine and referral-tree codes for RDS surveys."""

__version__ = "0.1.0"
