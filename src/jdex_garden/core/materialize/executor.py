"""Apply a plan to the filesystem."""

from dataclasses import dataclass

from loguru import logger

from jdex_garden.errors import IoError, PlanExecutionError
from jdex_garden.models.plan import Action, ActionKind, Plan
from jdex_garden.protocols import FileSystemProtocol


@dataclass(frozen=True)
class ExecutionReport:
    """Summary of an applied plan."""

    plan: Plan
    completed: tuple[Action, ...]

    @property
    def changed(self) -> int:
        return sum(1 for action in self.completed if action.kind is not ActionKind.SKIP)


def _apply(action: Action, fs: FileSystemProtocol) -> None:
    if action.kind is ActionKind.CREATE_DIR:
        fs.create_dir(action.path)
    elif action.kind is ActionKind.WRITE_FILE:
        fs.write_file(action.path, action.content or "")


def execute_plan(plan: Plan, fs: FileSystemProtocol) -> ExecutionReport:
    """Apply every action of the plan in order.

    Stops at the first failure. Paths created before the failure are left in
    place; the raised error lists the completed and pending actions.

    Raises:
        PathConflict: When a path turned out to have the wrong type.
        IoError: When any other filesystem operation failed.
    """
    completed: list[Action] = []
    for index, action in enumerate(plan.actions):
        try:
            _apply(action, fs)
        except PlanExecutionError as e:
            e.completed = tuple(completed)
            e.pending = plan.actions[index:]
            raise
        except OSError as e:
            error = IoError(action.path, e.strerror or str(e))
            error.completed = tuple(completed)
            error.pending = plan.actions[index:]
            raise error from e
        if action.kind is not ActionKind.SKIP:
            logger.debug("{}", action.describe())
        completed.append(action)

    report = ExecutionReport(plan=plan, completed=tuple(completed))
    logger.info("{}: {}", plan.label, plan.summary())
    return report
