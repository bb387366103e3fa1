"""Fixed names of the Cargo cache layout."""

from typing import Tuple

DEFAULT_CACHE_DIRNAME = ".cargo"
REGISTRY_SRC: Tuple[str, str] = ("registry", "src")
MIRROR_PREFIX = "index.crates.io-"
PROFDATA_SUFFIX = ".mm_profdata"
