"""
Lead Chat: a chat widget relay to a hosted language model that flags sales leads.
"""

__version__ = "0.1.0"
