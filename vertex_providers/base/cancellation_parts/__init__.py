"""Implementation modules for ``vertex_providers.base.cancellation``."""
