"""
Admin module registry.

The registry is a process-local directory of permission-gated admin modules.
It never authenticates anyone: callers pass an already-resolved user (or None
for anonymous) and get back booleans and filtered lists, never exceptions, for
access questions. Only structurally invalid modules raise (ValidationError).

Import the facade from `adminhub.core.registry.registry`.
"""
