"""
Document summarization through an external LLM.
"""

from .summarizer import LLMSummarizer, Summarizer, truncate_for_summary

__all__ = ["Summarizer", "LLMSummarizer", "truncate_for_summary"]
