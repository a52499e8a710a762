"""
Core package: the timer entity, the registry that owns timers, the
single-timer transitions and the bulk operations built on them.

Transitions are plain functions over a Timer and the current time; they never
read the clock or take the registry lock themselves.
"""
