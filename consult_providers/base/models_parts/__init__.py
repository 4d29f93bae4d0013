"""One-class-per-file domain models; import from ``consult_providers.base.models``."""
