from dataclasses import dataclass, field
from enum import Enum

from clonekit import Marker, build_cloner, clone_field, deep_clone, immutable
from clonekit.logging import configure_logging


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@immutable
class Credentials:
    """Shared by every copy; never duplicated."""

    def __init__(self, token: str) -> None:
        self.token = token


@dataclass
class Task:
    description: str
    status: TaskStatus
    blocked_by: list["Task"] = field(default_factory=list)


@dataclass
class Agent:
    name: str
    tasks: list[Task]
    credentials: Credentials
    scratchpad: dict = clone_field(Marker.IGNORE, default_factory=dict)


class AgentRenamer:
    """Custom strategy: copies of an Agent get a suffixed name."""

    def supports(self, cls: type) -> bool:
        return cls is Agent

    def copy(self, origin, context):
        clone = Agent.__new__(Agent)
        context.register_visited(origin, clone)
        clone.name = f"{origin.name}-copy"
        clone.tasks = context.proceed(origin.tasks)
        clone.credentials = origin.credentials
        clone.scratchpad = {}
        return clone


def main() -> None:
    configure_logging()
    collect = Task("Collect data", TaskStatus.PENDING)
    analyze = Task("Analyze data", TaskStatus.PENDING, blocked_by=[collect])
    collect.blocked_by.append(analyze)  # cycle
    agent = Agent(
        name="planner",
        tasks=[collect, analyze],
        credentials=Credentials("secret"),
        scratchpad={"draft": "..."},
    )

    clone = deep_clone(agent)
    clone.tasks[0].status = TaskStatus.COMPLETED

    print(f"Original first task: {agent.tasks[0].status.value}")
    print(f"Copied first task: {clone.tasks[0].status.value}")
    print(f"Cycle kept: {clone.tasks[0].blocked_by[0] is clone.tasks[1]}")
    print(f"Credentials shared: {clone.credentials is agent.credentials}")
    print(f"Scratchpad dropped: {clone.scratchpad is None}")

    renamed = build_cloner(AgentRenamer()).deep_clone(agent)
    print(f"Custom strategy name: {renamed.name}")


if __name__ == "__main__":
    main()
