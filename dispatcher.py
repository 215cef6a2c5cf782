"""Push one render descriptor to every active widget instance."""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from loguru import logger

from render_descriptor import RenderDescriptor


@dataclass
class DispatchReport:
    presented: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def dispatch(
    instances: Iterable[int],
    produce: Callable[[int], RenderDescriptor],
    present: Callable[[int, RenderDescriptor], bool],
) -> DispatchReport:
    """Build and present a descriptor per instance.

    A presenter that raises or returns False only fails its own instance;
    the remaining instances are still presented.
    """
    report = DispatchReport()
    for instance_id in instances:
        try:
            descriptor = produce(instance_id)
            ok = present(instance_id, descriptor)
        except Exception:
            logger.exception("Presenting widget {} failed", instance_id)
            report.failed.append(instance_id)
            continue
        if ok is False:
            logger.warning("Widget {} was not presented", instance_id)
            report.failed.append(instance_id)
        else:
            report.presented.append(instance_id)
    return report
