"""End-to-end training pipeline driven cooperatively on one asyncio loop.

The orchestrator owns the generated pool, the loss history, the current
predictor and the three canvases.  A run walks through::

    IDLE → PREPARING_DATA → BUILDING_TENSORS → COMPILING_MODEL
         → TRAINING → EVALUATING → COMPLETE

with ``ERROR`` reachable from every non-terminal state.  Control returns
to the event loop before each epoch, after each batch and after each
epoch, so progress text and the loss curve are repainted between steps
without threads.
"""

from __future__ import annotations

import asyncio
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

import numpy as np
import torch

from wavecast.config import DisplayConfig, GenerationConfig, TrainingConfig
from wavecast.data.dataset import build_window_dataset, to_tensors
from wavecast.data.generator import Sequence
from wavecast.errors import NoDataError, TensorConstructionError, TrainingBusyError
from wavecast.models import FitCallbacks, Predictor, build_model
from wavecast.training.history import LossHistory
from wavecast.utils.runtime import resolve_device, seed_all
from wavecast.validation.metrics import compute_all, summary
from wavecast.visualization.canvas import Canvas
from wavecast.visualization.plots import (
    EvaluationPlot,
    LossPlot,
    SequencePlot,
    render_evaluation,
    render_loss,
    render_sequences,
)
from wavecast.wandb_logger import WandbLogger


class TrainingState(Enum):
    IDLE = "idle"
    PREPARING_DATA = "preparing_data"
    BUILDING_TENSORS = "building_tensors"
    COMPILING_MODEL = "compiling_model"
    TRAINING = "training"
    EVALUATING = "evaluating"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class TensorBundle:
    """Train/validation tensors alive only while a run is training."""

    inputs: torch.Tensor
    labels: torch.Tensor
    val_inputs: torch.Tensor
    val_labels: torch.Tensor


@dataclass
class EvaluationResult:
    sequences: List[Sequence]
    labels: np.ndarray
    predictions: np.ndarray
    metrics: Dict[str, float] = field(default_factory=dict)
    plot: Optional[EvaluationPlot] = None


async def yield_control() -> None:
    """Hand control back to the event loop for one scheduling step."""
    await asyncio.sleep(0)


class TrainingOrchestrator:
    """Owns the pipeline state and sequences a full training run.

    Parameters
    ----------
    generation : GenerationConfig | None
        Wave sampling policy shared by the training, validation and test
        pools.
    training : TrainingConfig | None
        Run hyperparameters.
    display : DisplayConfig | None
        Default subset drawn by :meth:`render_sequences`.
    progress : callable(str) | None
        Sink for human-readable status text (defaults to ``print``).
    rng : np.random.Generator | None
        Random source for every generated pool.
    """

    def __init__(
        self,
        generation: GenerationConfig | None = None,
        training: TrainingConfig | None = None,
        display: DisplayConfig | None = None,
        progress: Callable[[str], None] | None = None,
        rng: np.random.Generator | None = None,
        canvas_size: tuple[int, int] = (800, 400),
        loss_canvas_size: tuple[int, int] = (600, 300),
    ) -> None:
        self.generation = generation or GenerationConfig()
        self.training = training or TrainingConfig()
        self.display = display or DisplayConfig()
        self._progress = progress or print

        if rng is None:
            rng = seed_all(self.training.seed) if self.training.seed is not None else np.random.default_rng()
        self.rng = rng

        self.wave_canvas = Canvas(*canvas_size)
        self.loss_canvas = Canvas(*loss_canvas_size)
        self.eval_canvas = Canvas(*canvas_size)

        self.pool: List[Sequence] = []
        self.history = LossHistory()
        self.predictor: Optional[Predictor] = None
        self.tensors: Optional[TensorBundle] = None
        self.evaluation: Optional[EvaluationResult] = None

        self.state = TrainingState.IDLE
        self.transitions: List[TrainingState] = []
        self._running = False

        # 1-based epoch and 0-based batch of the step in flight
        self.current_epoch: Optional[int] = None
        self.current_batch: Optional[int] = None

    # ── status ────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._running

    def _report(self, message: str) -> None:
        self._progress(message)

    def _set_state(self, state: TrainingState, message: str) -> None:
        self.state = state
        self.transitions.append(state)
        self._report(message)

    # ── pool and sequence view ────────────────────────────────────────

    def generate(self, config: GenerationConfig | None = None) -> List[Sequence]:
        """Replace the pool with freshly generated waves.

        The pool and its generation config are swapped together, so a
        rejected config leaves both untouched.
        """
        config = config or self.generation
        pool = config.generate(rng=self.rng)
        self.generation, self.pool = config, pool
        return self.pool

    def render_sequences(
        self,
        start_index: int | None = None,
        count: int | None = None,
    ) -> SequencePlot:
        start = self.display.start_index if start_index is None else start_index
        n = self.display.num_to_show if count is None else count
        return render_sequences(self.wave_canvas, self.pool, start, n)

    def render_loss(self) -> LossPlot:
        return render_loss(self.loss_canvas, self.history)

    def startup(self) -> SequencePlot:
        """Generate an initial pool and draw it."""
        self.generate()
        return self.render_sequences()

    # ── training ──────────────────────────────────────────────────────

    async def train(self) -> Optional[EvaluationResult]:
        """Run the whole pipeline once.

        Returns the evaluation result, or ``None`` when tensor
        construction failed (the run ends in ``ERROR``).

        Raises
        ------
        NoDataError
            If no pool has been generated.
        TrainingBusyError
            If a run is already in flight.
        """
        if self._running:
            raise TrainingBusyError("A training run is already in progress")
        if not self.pool:
            self._report("Generate data first!")
            raise NoDataError("Generate data first!")

        self._running = True
        try:
            return await self._run()
        except Exception as exc:
            self._set_state(TrainingState.ERROR, f"Training failed: {exc}")
            raise
        finally:
            self.tensors = None
            self._running = False

    def train_sync(self) -> Optional[EvaluationResult]:
        """Blocking wrapper around :meth:`train` for scripts."""
        return asyncio.run(self.train())

    async def _run(self) -> Optional[EvaluationResult]:
        cfg = self.training
        self.current_epoch = self.current_batch = None

        # -- data --
        self._set_state(TrainingState.PREPARING_DATA, "Preparing data...")
        await yield_control()
        train_ds = build_window_dataset(self.pool)
        val_pool = self.generation.generate(cfg.validation_count(len(self.pool)), rng=self.rng)
        val_ds = build_window_dataset(val_pool)

        self._set_state(TrainingState.BUILDING_TENSORS, "Creating tensors...")
        await yield_control()
        device = resolve_device(cfg.device)
        try:
            xs, ys = to_tensors(train_ds, device)
            val_xs, val_ys = to_tensors(val_ds, device)
        except TensorConstructionError as exc:
            traceback.print_exc()
            self._set_state(TrainingState.ERROR, f"Error creating tensors: {exc}")
            return None
        self.tensors = TensorBundle(xs, ys, val_xs, val_ys)
        del xs, ys, val_xs, val_ys

        # -- model --
        self._set_state(TrainingState.COMPILING_MODEL, "Compiling model...")
        await yield_control()
        self.history.reset()
        self.evaluation = None
        predictor = build_model(
            cfg.model,
            hidden_size=cfg.hidden_size,
            learning_rate=cfg.learning_rate,
            grad_clip=cfg.grad_clip,
            shuffle=cfg.shuffle,
            verbose=cfg.verbose,
            device=device,
            wandb_log_every=cfg.wandb_log_every,
        )
        predictor.compile("adam", learning_rate=cfg.learning_rate, loss="mse")
        self.predictor = predictor

        logger = WandbLogger(
            cfg.wandb_project,
            run_name=cfg.wandb_run_name or f"{cfg.model}_{datetime.now().strftime('%Y%m%d_%H%M%S')}",
            config={**cfg.to_dict(), **self.generation.to_dict()},
        ) if cfg.wandb_project else None

        # -- training --
        self._set_state(TrainingState.TRAINING, "Training started...")
        await yield_control()
        await predictor.fit(
            self.tensors.inputs,
            self.tensors.labels,
            epochs=cfg.epochs,
            batch_size=cfg.batch_size,
            validation_data=(self.tensors.val_inputs, self.tensors.val_labels),
            callbacks=self._callbacks(cfg.epochs),
            logger=logger,
        )
        self._report("Training complete!")
        self.tensors = None
        del train_ds, val_pool, val_ds

        # -- evaluation --
        self._set_state(TrainingState.EVALUATING, "Evaluating model...")
        await yield_control()
        result = self._evaluate(predictor, device)
        if logger is not None:
            logger.log_summary({f"test/{k}": v for k, v in result.metrics.items()})
            logger.finish()

        self._set_state(TrainingState.COMPLETE, "Training and Evaluation complete!")
        return result

    def _callbacks(self, total_epochs: int) -> FitCallbacks:
        current = 0

        async def on_epoch_begin(epoch: int) -> None:
            nonlocal current
            current = epoch + 1
            self.current_epoch = current
            self.current_batch = None
            self._report(f"Epoch: {current}/{total_epochs} - Starting...")
            await yield_control()

        async def on_batch_end(batch: int, loss: float) -> None:
            self.current_batch = batch
            self._report(f"Epoch: {current}/{total_epochs} - Batch: {batch} - Loss: {loss:.6f}")
            await yield_control()

        async def on_epoch_end(epoch: int, loss: float, val_loss: Optional[float]) -> None:
            self.history.append(epoch + 1, loss, val_loss)
            self.render_loss()
            message = f"Epoch: {epoch + 1}/{total_epochs} - Loss: {loss:.6f}"
            if val_loss is not None:
                message += f" - Val Loss: {val_loss:.6f}"
            self._report(message)
            await yield_control()

        return FitCallbacks(
            on_epoch_begin=on_epoch_begin,
            on_batch_end=on_batch_end,
            on_epoch_end=on_epoch_end,
        )

    def _evaluate(self, predictor: Predictor, device: str) -> EvaluationResult:
        test_pool = self.generation.generate(self.training.test_sequences, rng=self.rng)
        test_ds = build_window_dataset(test_pool)
        test_xs, _ = to_tensors(test_ds, device)
        predictions = predictor.predict(test_xs)
        del test_xs

        plot = render_evaluation(self.eval_canvas, test_pool, predictions)
        metrics = compute_all(test_ds.labels, predictions)
        if self.training.verbose:
            print(summary(test_ds.labels, predictions, f"{predictor.name}::test"))

        self.evaluation = EvaluationResult(
            sequences=test_pool,
            labels=test_ds.labels,
            predictions=predictions,
            metrics=metrics,
            plot=plot,
        )
        return self.evaluation

    def __repr__(self) -> str:
        return (
            f"TrainingOrchestrator(state={self.state.value}, pool={len(self.pool)}, "
            f"epochs={len(self.history)})"
        )
