"""
workpluck

A minimal work-distribution broker: producers submit topic-tagged tasks,
workers lease them by topic and post results, clients fetch the results.
"""

__version__ = "1.0.0"
