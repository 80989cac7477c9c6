"""Background work run under the log bridge.

Modules here log through ``logging`` under the ``reso_cmdlets.work`` logger,
which the CLI forwards into ``ENGINE_LOG``.
"""
