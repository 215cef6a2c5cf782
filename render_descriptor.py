"""What a single widget instance should display."""

from dataclasses import dataclass

from actions import NEXT, OPEN, PREV, ActionRef
from calendar_logic import DEFAULT_LABEL_FORMAT, MonthKey, month_label


@dataclass(frozen=True)
class RenderDescriptor:
    instance_id: int
    month: MonthKey
    label: str
    image_path: str | None
    prev: ActionRef
    next: ActionRef
    root: ActionRef

    @property
    def has_image(self) -> bool:
        return bool(self.image_path)


def build(instance_id: int, key: MonthKey, image_path: str | None,
          label_format: str = DEFAULT_LABEL_FORMAT) -> RenderDescriptor:
    """Assemble the descriptor for *instance_id*. No side effects."""
    return RenderDescriptor(
        instance_id=instance_id,
        month=key,
        label=month_label(key, label_format),
        image_path=image_path,
        prev=ActionRef(PREV, instance_id),
        next=ActionRef(NEXT, instance_id),
        root=ActionRef(OPEN, instance_id),
    )
