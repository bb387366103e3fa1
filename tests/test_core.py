"""
Test suite for cargo_profclean core functionality.
Covers locator, collector, cleaner, models and the clean pipeline.
"""

from pathlib import Path

import pytest

from cargo_profclean.core.cleaner import ProfdataCleaner, clean
from cargo_profclean.core.collector import collect_profiling_artifacts
from cargo_profclean.core.locator import (
    default_cache_root,
    locate_mirror_directory,
    registry_src_dir,
)
from cargo_profclean.core.models import (
    CleanerStats,
    CleanOutcome,
    CleanResult,
    CleanStatus,
    CleanSummary,
)
from cargo_profclean.core.pipeline import run_clean
from cargo_profclean.utils.filesystem import InMemoryFileSystem

MIRROR = "index.crates.io-abc123"


def make_mirror(cache_root: Path, name: str = MIRROR) -> Path:
    mirror = cache_root / "registry" / "src" / name
    mirror.mkdir(parents=True)
    return mirror


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x00profdata")
    return path


class RecordingReporter:
    def __init__(self):
        self.events = []

    def on_mirror_not_found(self, cache_root):
        self.events.append(("not_found", cache_root))

    def on_no_artifacts(self, mirror_dir):
        self.events.append(("empty", mirror_dir))

    def on_start(self, total_files, mirror_dir=None):
        self.events.append(("start", total_files))

    def on_file_cleaned(self, result):
        self.events.append(("cleaned", result.path))

    def on_file_failed(self, result):
        self.events.append(("failed", result.path))

    def on_complete(self, summary):
        self.events.append(("complete", summary))


# --- Locator Tests ---
def test_default_cache_root_is_under_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_cache_root() == tmp_path / ".cargo"


def test_registry_src_dir(tmp_path):
    assert registry_src_dir(tmp_path) == tmp_path / "registry" / "src"


def test_locate_mirror_missing_registry(tmp_path):
    assert locate_mirror_directory(tmp_path / "does-not-exist") is None
    assert locate_mirror_directory(tmp_path) is None


def test_locate_mirror_no_matching_entry(tmp_path):
    (tmp_path / "registry" / "src" / "github.com-1ecc6299db9ec823").mkdir(parents=True)
    assert locate_mirror_directory(tmp_path) is None


def test_locate_mirror_found(tmp_path):
    mirror = make_mirror(tmp_path)
    (tmp_path / "registry" / "src" / "other").mkdir()
    assert locate_mirror_directory(tmp_path) == mirror


def test_locate_mirror_picks_smallest_name(tmp_path):
    make_mirror(tmp_path, "index.crates.io-ffff")
    first = make_mirror(tmp_path, "index.crates.io-0000")
    assert locate_mirror_directory(tmp_path) == first


def test_locate_mirror_unreadable_src_is_not_found():
    fs = InMemoryFileSystem()
    fs.add_directory(Path("/cache/registry/src") / MIRROR)
    fs.deny_listing(Path("/cache/registry/src"))
    assert locate_mirror_directory(Path("/cache"), fs) is None


# --- Collector Tests ---
def test_collect_only_two_levels_deep(tmp_path):
    mirror = make_mirror(tmp_path)
    match = touch(mirror / "foo-1.0" / "bar.mm_profdata")
    touch(mirror / "top.mm_profdata")
    touch(mirror / "foo-1.0" / "src" / "deep.mm_profdata")
    touch(mirror / "foo-1.0" / "baz.txt")

    assert collect_profiling_artifacts(mirror) == [match]


def test_collect_suffix_is_case_sensitive(tmp_path):
    mirror = make_mirror(tmp_path)
    touch(mirror / "foo-1.0" / "bar.MM_PROFDATA")
    touch(mirror / "foo-1.0" / "bar.mm_profdata.bak")
    assert collect_profiling_artifacts(mirror) == []


def test_collect_across_crates(tmp_path):
    mirror = make_mirror(tmp_path)
    expected = [
        touch(mirror / "a-0.1.0" / "x.mm_profdata"),
        touch(mirror / "b-2.3.4" / "y.mm_profdata"),
        touch(mirror / "b-2.3.4" / "z.mm_profdata"),
    ]
    assert collect_profiling_artifacts(mirror) == sorted(expected)


def test_collect_skips_unreadable_crate_dir():
    fs = InMemoryFileSystem()
    mirror = Path("/cache/registry/src") / MIRROR
    readable = mirror / "ok-1.0" / "a.mm_profdata"
    fs.add_file(readable)
    fs.add_file(mirror / "locked-1.0" / "b.mm_profdata")
    fs.deny_listing(mirror / "locked-1.0")

    assert collect_profiling_artifacts(mirror, fs) == [readable]


def test_collect_missing_mirror_is_empty(tmp_path):
    assert collect_profiling_artifacts(tmp_path / "missing") == []


# --- Models Tests ---
def test_clean_result_success_and_failed():
    ok = CleanResult(status=CleanStatus.SUCCESS, path=Path("a.mm_profdata"))
    bad = CleanResult(
        status=CleanStatus.FAILED, path=Path("b.mm_profdata"), error=OSError("busy")
    )
    assert ok.success and not ok.failed
    assert bad.failed and not bad.success


def test_cleaner_stats_and_summary():
    stats = CleanerStats(files_found=2)
    stats.record_result(CleanResult(status=CleanStatus.SUCCESS, path=Path("a")))
    error = PermissionError("denied")
    stats.record_result(CleanResult(status=CleanStatus.FAILED, path=Path("b"), error=error))

    summary = CleanSummary.from_stats(stats, 0.5, Path("/m"))
    assert summary.files_found == 2
    assert summary.files_removed == 1
    assert summary.files_failed == 1
    assert summary.errors == [(Path("b"), error)]
    assert not summary.success


def test_clean_outcome_without_summary_is_success():
    outcome = CleanOutcome(cache_root=Path("/cache"))
    assert not outcome.mirror_found
    assert outcome.success
    assert outcome.cleaned_count == 0


# --- Cleaner Tests ---
def test_cleaner_removes_files(tmp_path):
    files = [touch(tmp_path / "c" / f"{i}.mm_profdata") for i in range(3)]
    reporter = RecordingReporter()

    summary = ProfdataCleaner(reporter=reporter).clean(files)

    assert summary.files_removed == 3
    assert summary.success
    assert not any(f.exists() for f in files)
    assert [e[0] for e in reporter.events] == [
        "start",
        "cleaned",
        "cleaned",
        "cleaned",
        "complete",
    ]


def test_cleaner_continues_after_failure():
    fs = InMemoryFileSystem()
    files = [Path(f"/m/crate/{i}.mm_profdata") for i in range(4)]
    for f in files:
        fs.add_file(f)
    fs.protect(files[1])
    reporter = RecordingReporter()

    summary = ProfdataCleaner(fs=fs, reporter=reporter).clean(files)

    assert summary.files_found == 4
    assert summary.files_removed == 3
    assert summary.files_failed == 1
    assert isinstance(summary.errors[0][1], PermissionError)
    assert fs.is_file(files[1])
    assert not any(fs.is_file(f) for f in files if f != files[1])
    assert ("failed", files[1]) in reporter.events


def test_cleaner_missing_file_is_failure_not_abort():
    fs = InMemoryFileSystem()
    present = Path("/m/crate/a.mm_profdata")
    fs.add_file(present)

    summary = ProfdataCleaner(fs=fs).clean([Path("/m/crate/gone.mm_profdata"), present])

    assert summary.files_failed == 1
    assert summary.files_removed == 1


def test_clean_function_returns_attempted_count():
    fs = InMemoryFileSystem()
    files = [Path("/m/crate/a.mm_profdata"), Path("/m/crate/b.mm_profdata")]
    for f in files:
        fs.add_file(f)
    fs.protect(files[0])

    assert clean(files, fs=fs) == 2


# --- Pipeline Tests ---
def test_run_clean_mirror_not_found(tmp_path):
    (tmp_path / "keep.mm_profdata").write_text("x")
    reporter = RecordingReporter()

    outcome = run_clean(tmp_path, reporter=reporter)

    assert outcome.mirror_dir is None
    assert outcome.summary is None
    assert reporter.events == [("not_found", tmp_path)]
    assert (tmp_path / "keep.mm_profdata").exists()


def test_run_clean_no_artifacts(tmp_path):
    mirror = make_mirror(tmp_path)
    other = touch(mirror / "foo-1.0" / "lib.rs")
    reporter = RecordingReporter()

    outcome = run_clean(tmp_path, reporter=reporter)

    assert outcome.mirror_dir == mirror
    assert outcome.summary is None
    assert reporter.events == [("empty", mirror)]
    assert other.exists()


def test_run_clean_deletes_exactly_matches(tmp_path):
    mirror = make_mirror(tmp_path)
    matches = [
        touch(mirror / "foo-1.0" / "a.mm_profdata"),
        touch(mirror / "foo-1.0" / "b.mm_profdata"),
        touch(mirror / "bar-0.2.0" / "c.mm_profdata"),
    ]
    kept = [
        touch(mirror / "foo-1.0" / "baz.txt"),
        touch(mirror / "direct.mm_profdata"),
        touch(mirror / "foo-1.0" / "nested" / "deep.mm_profdata"),
        touch(tmp_path / "registry" / "src" / "loose.mm_profdata"),
    ]

    outcome = run_clean(tmp_path)

    assert outcome.cleaned_count == 3
    assert outcome.success
    assert not any(f.exists() for f in matches)
    assert all(f.exists() for f in kept)


def test_run_clean_is_idempotent(tmp_path):
    mirror = make_mirror(tmp_path)
    touch(mirror / "foo-1.0" / "a.mm_profdata")

    first = run_clean(tmp_path)
    second = run_clean(tmp_path)

    assert first.cleaned_count == 1
    assert second.summary is None
    assert second.cleaned_count == 0


def test_run_clean_undeletable_entry_does_not_abort(tmp_path):
    mirror = make_mirror(tmp_path)
    touch(mirror / "foo-1.0" / "a.mm_profdata")
    touch(mirror / "foo-1.0" / "c.mm_profdata")
    # A directory with the suffix is collected, but cannot be unlinked.
    (mirror / "foo-1.0" / "b.mm_profdata").mkdir()

    outcome = run_clean(tmp_path)

    assert outcome.summary.files_found == 3
    assert outcome.summary.files_removed == 2
    assert outcome.summary.files_failed == 1
    assert not outcome.success
    assert not (mirror / "foo-1.0" / "a.mm_profdata").exists()
    assert not (mirror / "foo-1.0" / "c.mm_profdata").exists()


@pytest.mark.parametrize("as_str", [True, False])
def test_run_clean_accepts_str_and_path(tmp_path, as_str):
    mirror = make_mirror(tmp_path)
    touch(mirror / "foo-1.0" / "a.mm_profdata")
    root = str(tmp_path) if as_str else tmp_path

    outcome = run_clean(root)

    assert outcome.cache_root == tmp_path
    assert outcome.cleaned_count == 1
