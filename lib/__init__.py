# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for table and storage operations
# - utils.py: Shared utilities (text helpers, optional side-effect runner)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import StepResult, excerpt, flatten_whitespace, run_optional_step

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "StepResult",
    "excerpt",
    "flatten_whitespace",
    "run_optional_step",
]
