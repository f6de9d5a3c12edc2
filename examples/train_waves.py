"""Generate sine waves, train a predictor and write the three diagnostic views.

Usage
-----
::

    python -m examples.train_waves
    python -m examples.train_waves --num-sequences 200 --epochs 40 --model gru
"""

from __future__ import annotations

import argparse
import os
import sys
import time

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from wavecast.config import DisplayConfig, GenerationConfig, TrainingConfig
from wavecast.models import list_models
from wavecast.training import TrainingOrchestrator


def build_parser() -> argparse.ArgumentParser:
    gen = GenerationConfig()
    disp = DisplayConfig()
    train = TrainingConfig()

    parser = argparse.ArgumentParser(description="Train a next-sample sine-wave predictor")
    parser.add_argument("--num-sequences", type=int, default=gen.num_sequences)
    parser.add_argument("--min-amp", type=float, default=gen.min_amp)
    parser.add_argument("--max-amp", type=float, default=gen.max_amp)
    parser.add_argument("--min-period", type=float, default=gen.min_period)
    parser.add_argument("--max-period", type=float, default=gen.max_period)
    parser.add_argument("--neg-prob", type=float, default=gen.negative_probability,
                        help="Percentage chance (0-100) that a wave is sign-flipped")
    parser.add_argument("--start-index", type=int, default=disp.start_index)
    parser.add_argument("--num-to-show", type=int, default=disp.num_to_show)
    parser.add_argument(
        "--model", type=str, default=train.model,
        help=f"Predictor name. Available: {', '.join(list_models())}",
    )
    parser.add_argument("--epochs", type=int, default=train.epochs)
    parser.add_argument("--batch-size", type=int, default=train.batch_size)
    parser.add_argument("--learning-rate", type=float, default=train.learning_rate)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--device", type=str, default=train.device)
    parser.add_argument("--out-dir", type=str, default="plots")
    parser.add_argument("--wandb-project", type=str, default=None)
    parser.add_argument("--generate-only", action="store_true",
                        help="Only generate and plot the waves")
    parser.add_argument("--quiet", action="store_true", help="Hide progress bars")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    generation = GenerationConfig(
        num_sequences=args.num_sequences,
        min_amp=args.min_amp,
        max_amp=args.max_amp,
        min_period=args.min_period,
        max_period=args.max_period,
        negative_probability=args.neg_prob,
    )
    training = TrainingConfig(
        model=args.model,
        epochs=args.epochs,
        batch_size=args.batch_size,
        learning_rate=args.learning_rate,
        seed=args.seed,
        device=args.device,
        verbose=not args.quiet,
        wandb_project=args.wandb_project,
    )
    display = DisplayConfig(start_index=args.start_index, num_to_show=args.num_to_show)

    orchestrator = TrainingOrchestrator(generation, training, display)
    orchestrator.generate()
    orchestrator.render_sequences()
    waves_path = orchestrator.wave_canvas.save(os.path.join(args.out_dir, "waves.png"))
    print(f"Generated {len(orchestrator.pool)} waves → {waves_path}")

    if args.generate_only:
        return 0

    t0 = time.time()
    result = orchestrator.train_sync()
    print(f"Train time: {time.time() - t0:.1f}s")

    loss_path = orchestrator.loss_canvas.save(os.path.join(args.out_dir, "loss.png"))
    print(f"Loss curve → {loss_path}")
    if result is None:
        return 1

    eval_path = orchestrator.eval_canvas.save(os.path.join(args.out_dir, "evaluation.png"))
    print(f"Evaluation → {eval_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
