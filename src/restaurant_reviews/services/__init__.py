"""Business services.

Each service receives its stores through the constructor and raises the
exceptions defined in its package's ``exceptions`` module.
"""
