"""
Gaussian Naive Bayes spam classifier for the Spambase feature dataset.
"""

__version__ = "1.0.0"
