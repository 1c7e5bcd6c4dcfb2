"""
The VIEW layer: Qt widgets that show the diagram and collect user input.
Widgets only read the model; every change goes through the controller.
"""
