# storage/history.py

import sqlite3
from sqlite3 import Connection
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, List, Optional
import logging

import pandas as pd

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    "rank", "server", "total", "successRate", "errorRate",
    "latency", "qps", "noData",
]


class ScoreHistory:
    """
    История рейтингов DNS серверов в SQLite.
    Один прогон (run_id) = одна сохранённая таблица rank_results().
    """

    def __init__(self, db_path: str = "data/dnsscore.db"):
        self.db_path = db_path
        self._init_db()

    def _init_db(self):
        """Создаёт схему при первом запуске."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS scores (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    run_id TEXT NOT NULL,
                    rank INTEGER NOT NULL,
                    server TEXT NOT NULL,
                    total REAL NOT NULL,
                    success_rate REAL NOT NULL,
                    error_rate REAL NOT NULL,
                    latency REAL NOT NULL,
                    qps REAL NOT NULL,
                    no_data BOOLEAN DEFAULT FALSE,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_scores_run ON scores(run_id, rank)")

        logger.debug(f"База истории инициализирована: {self.db_path}")

    @contextmanager
    def get_connection(self) -> Generator[Connection, None, None]:
        """Подключение на одну операцию: commit при успехе, rollback при ошибке."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30)
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            logger.error(f"Ошибка базы данных: {e}")
            raise
        finally:
            if conn:
                conn.close()

    def save_ranking(self, df: pd.DataFrame, run_id: Optional[str] = None) -> str:
        """Сохраняет рейтинг, возвращает run_id."""
        if run_id is None:
            run_id = datetime.now(timezone.utc).isoformat(timespec="seconds")

        records = [
            (
                run_id,
                int(row["rank"]),
                str(row["server"]),
                float(row["total"]),
                float(row["successRate"]),
                float(row["errorRate"]),
                float(row["latency"]),
                float(row["qps"]),
                bool(row["noData"]),
            )
            for _, row in df.iterrows()
        ]

        with self.get_connection() as conn:
            conn.executemany("""
                INSERT INTO scores
                (run_id, rank, server, total, success_rate, error_rate, latency, qps, no_data)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, records)

        logger.info(f"Рейтинг сохранён: run={run_id}, серверов={len(records)}")
        return run_id

    def get_run(self, run_id: str) -> pd.DataFrame:
        with self.get_connection() as conn:
            df = pd.read_sql_query("""
                SELECT rank, server, total,
                       success_rate AS successRate,
                       error_rate AS errorRate,
                       latency, qps,
                       no_data AS noData
                FROM scores
                WHERE run_id = ?
                ORDER BY rank
            """, conn, params=(run_id,))

        if df.empty:
            return pd.DataFrame(columns=HISTORY_COLUMNS)

        df["noData"] = df["noData"].astype(bool)
        return df[HISTORY_COLUMNS]

    def list_runs(self) -> List[str]:
        """Все run_id, новые сначала."""
        with self.get_connection() as conn:
            rows = conn.execute("""
                SELECT run_id, MAX(id) AS last_id
                FROM scores
                GROUP BY run_id
                ORDER BY last_id DESC
            """).fetchall()

        return [row["run_id"] for row in rows]
