"""
WalletTool - key record extraction for Bitcoin Core wallet.dat containers
"""

__version__ = "1.0.0"
