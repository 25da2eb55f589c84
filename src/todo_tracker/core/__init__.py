"""Core plumbing: ports (Protocols), observable values, app state."""
