"""
The CONTROLLER layer turns user actions (choosing a file) into state changes
and announces them to the views with Qt signals.
"""
