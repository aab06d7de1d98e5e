"""API schema package."""
