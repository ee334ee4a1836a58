"""
Scoring for the SUS survey.

- Calculator: raw answers to a 0-100 SUS score
- Interpreter: score to rating and letter grade
"""
