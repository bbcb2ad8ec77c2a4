"""
FraudCheck Scoring Gateway
Stored features -> model server -> verdict vs ground truth
"""

__version__ = "1.0.0"
