"""One-class-per-file implementations re-exported by ``base.models``."""
