"""Append-only per-epoch loss record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class EpochRecord:
    epoch: int
    loss: float
    val_loss: Optional[float] = None


class LossHistory:
    """Ordered list of :class:`EpochRecord`.

    Records can only be appended; :meth:`reset` clears the whole list at
    the start of a new training run.
    """

    def __init__(self) -> None:
        self._records: List[EpochRecord] = []

    def append(self, epoch: int, loss: float, val_loss: Optional[float] = None) -> EpochRecord:
        if epoch < 1:
            raise ValueError(f"epoch must be >= 1, got {epoch}")
        if loss < 0 or (val_loss is not None and val_loss < 0):
            raise ValueError(f"losses must be non-negative, got {loss}, {val_loss}")
        record = EpochRecord(epoch=int(epoch), loss=float(loss),
                             val_loss=None if val_loss is None else float(val_loss))
        self._records.append(record)
        return record

    def reset(self) -> None:
        self._records = []

    @property
    def records(self) -> Tuple[EpochRecord, ...]:
        return tuple(self._records)

    @property
    def losses(self) -> List[float]:
        return [r.loss for r in self._records]

    @property
    def val_losses(self) -> List[Optional[float]]:
        return [r.val_loss for r in self._records]

    def max_loss(self) -> float:
        """Largest recorded training or validation loss (0 when empty)."""
        peak = 0.0
        for r in self._records:
            peak = max(peak, r.loss)
            if r.val_loss is not None:
                peak = max(peak, r.val_loss)
        return peak

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EpochRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> EpochRecord:
        return self._records[index]

    def __repr__(self) -> str:
        return f"LossHistory(epochs={len(self._records)})"
