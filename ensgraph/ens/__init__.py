"""
ENS: profile resolution over web3.py and name search over the ENS subgraph.
"""
