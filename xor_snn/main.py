"""
XOR training driver.

Builds one SNN, trains it for NUM_EPOCHS epochs, then runs the rounded test
pass. Optional outputs:
- training_history.csv: every training step (epoch, x0, x1, expected, actual, cost)
- test_results.csv: the test pass (x0, x1, expected, actual_rounded, correct)
- performance_stats.csv: timings and final accuracy
- loss_curve.png / xor_training.gif: cost curve and decision-boundary animation
"""

import argparse
import sys
import time

from xor_snn.config import LEARNING_RATE, NUM_EPOCHS, NUM_HIDDEN_NODES, ConfigError, NetworkConfig
from xor_snn.network import SNN
from xor_snn.reporting import (
    ConsoleReporter,
    HistoryRecorder,
    decision_boundary_frame,
    plot_loss_curve,
    save_history_to_csv,
    save_performance_stats,
    save_test_results_to_csv,
    save_training_gif,
)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Train a 2-2-1 sigmoid network on XOR with backpropagation."
    )
    parser.add_argument("--epochs", type=int, default=NUM_EPOCHS, help="number of training epochs")
    parser.add_argument("--learning-rate", type=float, default=LEARNING_RATE, help="gradient descent step size")
    parser.add_argument("--hidden-size", type=int, default=NUM_HIDDEN_NODES, help="number of hidden units")
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: fresh entropy)")
    parser.add_argument("--verbose", action="store_true", help="print every training step")
    parser.add_argument("--log-interval", type=int, default=1000, help="epochs between cost summaries")
    parser.add_argument("--history-csv", default=None, help="write every training step to this CSV")
    parser.add_argument("--results-csv", default=None, help="write the test pass to this CSV")
    parser.add_argument("--stats-csv", default=None, help="write timing statistics to this CSV")
    parser.add_argument("--loss-plot", default=None, help="save the cost curve to this image")
    parser.add_argument("--gif", default=None, help="save a decision-boundary animation to this GIF")
    parser.add_argument("--gif-interval", type=int, default=100, help="epochs between GIF frames")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = NetworkConfig(
            hidden_size=args.hidden_size,
            learning_rate=args.learning_rate,
            seed=args.seed,
        ).validate()
        if args.epochs < 0:
            raise ConfigError(f"--epochs must be >= 0, got {args.epochs}")
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2

    console = ConsoleReporter(verbose=args.verbose, log_interval=args.log_interval)
    history = HistoryRecorder()

    def reporter(record):
        console(record)
        history(record)

    network = SNN(config, reporter=reporter)

    print("\n=== XOR SNN ===")
    print(f"Topology: {config.input_size}-{config.hidden_size}-{config.output_size}, "
          f"learning rate {config.learning_rate}, epochs {args.epochs}")

    perf_stats = {
        'epochs': args.epochs,
        'learning_rate': config.learning_rate,
        'hidden_size': config.hidden_size,
        'seed': config.seed,
    }
    overall_start = time.time()

    # 1. Train -------------------------------------------------------------
    print("\nTraining...")
    train_start = time.time()
    frames = []
    if args.gif:
        interval = max(1, args.gif_interval)
        frames.append(decision_boundary_frame(network, 0))
        remaining = args.epochs
        while remaining > 0:
            chunk = min(interval, remaining)
            network.train(chunk)
            remaining -= chunk
            frames.append(decision_boundary_frame(network, network.epochs_trained))
    else:
        network.train(args.epochs)
    console.flush()
    train_time = time.time() - train_start
    print(f"Training done in {train_time:.4f} s")

    # 2. Test --------------------------------------------------------------
    test_start = time.time()
    network.test()
    test_time = time.time() - test_start

    correct = sum(1 for r in history.test_records if int(round(r.expected)) == r.actual_rounded)
    last_epoch = history.train_records[-network.num_training_sets:]
    perf_stats.update({
        'train_time_sec': train_time,
        'test_time_sec': test_time,
        'final_mean_cost': sum(r.cost for r in last_epoch) / len(last_epoch) if last_epoch else None,
        'test_correct': correct,
    })
    print(f"\nTest accuracy: {correct}/{network.num_training_sets}")

    # 3. Save outputs --------------------------------------------------------
    if args.history_csv or args.results_csv or args.stats_csv or args.loss_plot or args.gif:
        print("\n" + "="*50)
        print("SAVING OUTPUTS")
        print("="*50)

    if args.history_csv:
        save_history_to_csv(history.records, args.history_csv)
    if args.results_csv:
        save_test_results_to_csv(history.records, args.results_csv)
    if args.loss_plot:
        plot_loss_curve(history.records, args.loss_plot)
    if args.gif:
        save_training_gif(frames, args.gif)

    total_time = time.time() - overall_start
    perf_stats['total_execution_time_sec'] = total_time
    if args.stats_csv:
        save_performance_stats(perf_stats, args.stats_csv)

    print(f"\nDone! Total execution time: {total_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
