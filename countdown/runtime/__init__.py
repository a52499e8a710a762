"""
Runtime package: clock sources, configuration, the application context that
exposes the timer operations, and the periodic tick schedulers.

Modules are imported directly (``countdown.runtime.scheduler`` etc.); the
package itself re-exports nothing so that core modules can depend on
``countdown.runtime.concurrency`` without import cycles.
"""
