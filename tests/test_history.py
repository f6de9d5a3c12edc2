"""Tests for LossHistory."""

import pytest

from wavecast.training.history import EpochRecord, LossHistory


def test_append_and_read():
    h = LossHistory()
    h.append(1, 0.5, 0.6)
    h.append(2, 0.3, None)
    assert len(h) == 2
    assert h.records == (EpochRecord(1, 0.5, 0.6), EpochRecord(2, 0.3, None))
    assert h.losses == [0.5, 0.3]
    assert h.val_losses == [0.6, None]
    assert h[1].epoch == 2


def test_max_loss_covers_validation():
    h = LossHistory()
    assert h.max_loss() == 0.0
    h.append(1, 0.2, 0.9)
    h.append(2, 0.4, None)
    assert h.max_loss() == 0.9


def test_reset_clears():
    h = LossHistory()
    h.append(1, 0.1)
    h.reset()
    assert len(h) == 0
    assert list(h) == []


def test_records_view_is_read_only():
    h = LossHistory()
    h.append(1, 0.1)
    assert isinstance(h.records, tuple)
    assert not hasattr(h, "remove")


@pytest.mark.parametrize("epoch,loss,val", [(0, 0.1, None), (1, -0.1, None), (1, 0.1, -1.0)])
def test_invalid_records_rejected(epoch, loss, val):
    with pytest.raises(ValueError):
        LossHistory().append(epoch, loss, val)
