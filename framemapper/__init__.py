"""
FrameMapper: AI-generated side-by-side comparisons between frameworks

Given a framework the user knows, one they want to learn, and a piece of
functionality, asks a language model for paired code samples (or spreadsheet
steps, optionally illustrated) plus an explanation of the differences.
"""

__version__ = "0.1.0"
