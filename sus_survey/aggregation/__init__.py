"""
Aggregation for the SUS survey.

Turns the stored submission set into dashboard statistics.
"""
