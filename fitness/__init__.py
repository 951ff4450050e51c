"""Fitness application package root.

Holds the activity, user, schedule and query domain packages, plus ``core``
with the model, controller and console interface.
"""
