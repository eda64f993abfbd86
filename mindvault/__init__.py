"""
MindVault document engine.

Chunking and context budgeting for question answering over uploaded
documents.
"""

__version__ = "1.0.0"
