#!/usr/bin/env python3
"""
Точка входа dnsscore.
Запуск: python main.py {score,rank,history} [options]
"""
import argparse
import json
import logging
import sys

from bench.loader import load_results
from config.settings import get_settings
from scoring.ranking import rank_results
from scoring.scorer import compute_dns_score
from storage.history import ScoreHistory

logger = logging.getLogger(__name__)


def cmd_score(args, settings) -> int:
    """Score каждого сервера из отчёта."""
    results = load_results(args.report)
    if args.server:
        results = [r for r in results if r.server == args.server]
        if not results:
            logger.error(f"Сервер не найден в отчёте: {args.server}")
            return 1

    records = []
    for r in results:
        record = {"server": r.server}
        record.update(compute_dns_score(r, settings.scoring).to_dict())
        records.append(record)

    if args.format == "json":
        print(json.dumps(records, indent=2, ensure_ascii=False))
    else:
        for rec in records:
            print(
                f"{rec['server']:<24} total={rec['total']:6.2f} "
                f"success={rec['successRate']:6.2f} error={rec['errorRate']:6.2f} "
                f"latency={rec['latency']:6.2f} qps={rec['qps']:6.2f}"
            )
    return 0


def cmd_rank(args, settings) -> int:
    """Рейтинг серверов из отчёта."""
    df = rank_results(load_results(args.report), settings.scoring)

    if args.save:
        run_id = ScoreHistory(settings.database.path).save_ranking(df)
        logger.info(f"Сохранено в историю: {run_id}")

    if args.top is not None:
        df = df.head(args.top)

    _print_frame(df, args.format)
    return 0


def cmd_history(args, settings) -> int:
    """Список прогонов или один прогон."""
    history = ScoreHistory(settings.database.path)

    if not args.run_id:
        for run_id in history.list_runs():
            print(run_id)
        return 0

    df = history.get_run(args.run_id)
    if df.empty:
        logger.error(f"Прогон не найден: {args.run_id}")
        return 1

    _print_frame(df, args.format)
    return 0


def _print_frame(df, fmt: str):
    if fmt == "json":
        print(json.dumps(df.to_dict(orient="records"), indent=2, ensure_ascii=False))
    elif fmt == "csv":
        print(df.to_csv(index=False), end="")
    elif df.empty:
        print("Нет результатов")
    else:
        print(df.to_string(index=False))


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ожидалось целое число: {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"должно быть >= 1: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Оценка результатов DNS бенчмарка")
    sub = parser.add_subparsers(dest="command", required=True)

    p_score = sub.add_parser("score", help="Score по каждому серверу")
    p_score.add_argument("report", help="JSON отчёт бенчмарка")
    p_score.add_argument("--server", help="Только этот сервер")
    p_score.add_argument("--format", choices=["json", "table"], default="table")
    p_score.set_defaults(func=cmd_score)

    p_rank = sub.add_parser("rank", help="Рейтинг серверов")
    p_rank.add_argument("report", help="JSON отчёт бенчмарка")
    p_rank.add_argument("--top", type=_positive_int, help="Показать первые N")
    p_rank.add_argument("--format", choices=["table", "json", "csv"], default="table")
    p_rank.add_argument("--save", action="store_true", help="Сохранить в историю")
    p_rank.set_defaults(func=cmd_rank)

    p_hist = sub.add_parser("history", help="Сохранённые рейтинги")
    p_hist.add_argument("run_id", nargs="?", help="Идентификатор прогона")
    p_hist.add_argument("--format", choices=["table", "json", "csv"], default="table")
    p_hist.set_defaults(func=cmd_history)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    # Настройка логирования
    logging.basicConfig(
        level=settings.log_level.value,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        return args.func(args, settings)
    except (ValueError, OSError) as e:
        logger.error(f"Ошибка: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
