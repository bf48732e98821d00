"""Interactive automation bot for the Tea Sepolia testnet"""

__version__ = "1.0.0"
