"""
Optional tick sinks that build features on top of the notification stream.
"""
