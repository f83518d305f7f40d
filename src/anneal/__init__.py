"""
Anneal Core

Decides which AUR packages must be rebuilt after a batch of package
upgrades, based on a curated trigger list, user overrides and the size
of each version change.
"""

from .config import Config
from .errors import AnnealError, CommandError, ConfigError
from .glob_match import matches_glob
from .overrides import Overrides
from .pipeline import MarkedPackage, TriggerInput, TriggerResult, process_triggers
from .registry import TRIGGER_LIST_VERSION, TRIGGERS
from .threshold import Threshold, exceeds_threshold
from .version import Version, compare_versions, parse_version

__all__ = [
    "AnnealError",
    "CommandError",
    "Config",
    "ConfigError",
    "MarkedPackage",
    "Overrides",
    "TRIGGERS",
    "TRIGGER_LIST_VERSION",
    "Threshold",
    "TriggerInput",
    "TriggerResult",
    "Version",
    "compare_versions",
    "exceeds_threshold",
    "matches_glob",
    "parse_version",
    "process_triggers",
]

__version__ = "1.0.0"
