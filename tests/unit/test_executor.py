"""Tests for applying plans and for the run pipeline."""

from pathlib import Path

import pytest

from jdex_garden.cli import run_garden
from jdex_garden.config import GardenConfig
from jdex_garden.core.materialize.executor import execute_plan
from jdex_garden.core.materialize.planner import plan_materialization
from jdex_garden.errors import IoError, PathConflict
from jdex_garden.models.node import ResolvedSystem
from jdex_garden.models.plan import Action, ActionKind, Plan
from tests.unit.conftest import ARCHIVE, META_DIR, NOTES, SNIPPETS_DIR
from tests.unit.fakes import FakeFileSystem, RecordingRenderer


def test_execute_applies_actions_in_order(
    example_system: ResolvedSystem, fake_fs: FakeFileSystem, renderer: RecordingRenderer
) -> None:
    plan = plan_materialization(example_system, NOTES, fake_fs, renderer)

    report = execute_plan(plan, fake_fs)

    assert report.completed == plan.actions
    assert report.changed == len(plan.actions)
    assert SNIPPETS_DIR / "N01.10.10.X01 Rust" in fake_fs.dirs
    assert fake_fs.files[META_DIR / "N01.00.01 System Inbox.md"] == "<markdown:N01.00.01>"
    assert fake_fs.calls[0] == ("create_dir", NOTES)


def test_execute_never_overwrites_existing_notes(
    example_system: ResolvedSystem, fake_fs: FakeFileSystem, renderer: RecordingRenderer
) -> None:
    execute_plan(plan_materialization(example_system, NOTES, fake_fs, renderer), fake_fs)
    note = META_DIR / "N01.00.01 System Inbox.md"
    fake_fs.files[note] = "hand edited"

    execute_plan(plan_materialization(example_system, NOTES, fake_fs, renderer), fake_fs)

    assert fake_fs.files[note] == "hand edited"


def test_execute_always_rewrites_index(
    example_system: ResolvedSystem, fake_fs: FakeFileSystem, renderer: RecordingRenderer
) -> None:
    execute_plan(plan_materialization(example_system, NOTES, fake_fs, renderer), fake_fs)
    index = META_DIR / "N01.00.00 JDex.md"
    fresh = fake_fs.files[index]
    fake_fs.files[index] = "stale"

    execute_plan(plan_materialization(example_system, NOTES, fake_fs, renderer), fake_fs)

    assert fake_fs.files[index] == fresh


def test_skip_actions_do_not_touch_filesystem() -> None:
    fs = FakeFileSystem()
    plan = Plan(
        label="notes",
        root=Path("/"),
        actions=(Action(ActionKind.SKIP, Path("/a"), "directory exists"),),
    )

    report = execute_plan(plan, fs)

    assert fs.calls == []
    assert report.changed == 0
    assert len(report.completed) == 1


def test_failure_aborts_and_reports_progress(
    example_system: ResolvedSystem, fake_fs: FakeFileSystem, renderer: RecordingRenderer
) -> None:
    plan = plan_materialization(example_system, NOTES, fake_fs, renderer)
    failing = META_DIR / "N01.00.02 WIP"
    fake_fs.fail_paths.add(failing)
    failed_at = [a.path for a in plan.actions].index(failing)

    with pytest.raises(IoError, match="Permission denied") as exc_info:
        execute_plan(plan, fake_fs)

    error = exc_info.value
    assert error.path == failing
    assert error.completed == plan.actions[:failed_at]
    assert error.pending == plan.actions[failed_at:]
    # Already-created paths stay in place.
    assert META_DIR in fake_fs.dirs
    assert failing not in fake_fs.dirs
    assert META_DIR / "N01.00.08 Someday" not in fake_fs.dirs


def test_conflict_during_execution_carries_progress() -> None:
    fs = FakeFileSystem(dirs=("/",))
    plan = Plan(
        label="notes",
        root=Path("/"),
        actions=(
            Action(ActionKind.CREATE_DIR, Path("/a"), "missing directory"),
            Action(ActionKind.CREATE_DIR, Path("/b"), "missing directory"),
        ),
    )
    fs.files[Path("/b")] = "appeared after planning"

    with pytest.raises(PathConflict) as exc_info:
        execute_plan(plan, fs)

    assert len(exc_info.value.completed) == 1
    assert len(exc_info.value.pending) == 1


def test_missing_parent_is_an_io_error() -> None:
    fs = FakeFileSystem(dirs=("/",))
    plan = Plan(
        label="notes",
        root=Path("/"),
        actions=(Action(ActionKind.WRITE_FILE, Path("/missing/note.md"), "new note", "x"),),
    )

    with pytest.raises(IoError, match="No such file"):
        execute_plan(plan, fs)


def test_dry_run_and_real_run_plan_the_same(
    example_config: GardenConfig, renderer: RecordingRenderer
) -> None:
    dry_fs = FakeFileSystem(dirs=("/", "/garden"))
    real_fs = FakeFileSystem(dirs=("/", "/garden"))

    dry_plans = run_garden(example_config, dry_fs, renderer, dry_run=True)
    real_plans = run_garden(example_config, real_fs, renderer, dry_run=False)

    assert dry_plans == real_plans
    assert dry_fs.calls == []
    assert real_fs.calls


def test_run_mirrors_directories_into_reference_folder(
    example_config: GardenConfig, fake_fs: FakeFileSystem, renderer: RecordingRenderer
) -> None:
    run_garden(example_config, fake_fs, renderer)

    mirrored = ARCHIVE / "N01" / "N01.00-09 System" / "N01.00 Meta" / "N01.00.08 Someday"
    assert mirrored in fake_fs.dirs
    assert not any(path.is_relative_to(ARCHIVE) for path in fake_fs.files)


def test_reference_failure_reports_progress_of_whole_run(
    example_config: GardenConfig, fake_fs: FakeFileSystem, renderer: RecordingRenderer
) -> None:
    notes_plan, reference_plan = run_garden(example_config, fake_fs, renderer, dry_run=True)
    fake_fs.fail_paths.add(ARCHIVE)

    with pytest.raises(IoError) as exc_info:
        run_garden(example_config, fake_fs, renderer)

    assert exc_info.value.completed == notes_plan.actions
    assert exc_info.value.pending == reference_plan.actions
    assert META_DIR in fake_fs.dirs
    assert ARCHIVE not in fake_fs.dirs
