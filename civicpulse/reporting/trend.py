"""
Sentiment Trend Builder.

Builds a day-by-day sentiment table over a date range and writes it to CSV.
"""

import json
import logging
import os
from datetime import datetime, timedelta
from typing import Iterable, List

import pandas as pd

from civicpulse.models.aggregation import percent_of
from civicpulse.models.classification import Sentiment, SentimentLog

logger = logging.getLogger(__name__)

SENTIMENT_COLUMNS = [sentiment.value for sentiment in Sentiment]


def date_range(start_date: str, end_date: str) -> List[str]:
    """Dates from start_date to end_date inclusive, YYYY-MM-DD."""
    start = datetime.strptime(start_date, "%Y-%m-%d")
    end = datetime.strptime(end_date, "%Y-%m-%d")

    dates = []
    current = start
    while current <= end:
        dates.append(current.strftime("%Y-%m-%d"))
        current += timedelta(days=1)
    return dates


class SentimentTrendBuilder:
    """
    Counts sentiments per day for trend charts and exports.
    """

    def build(
        self,
        logs: Iterable[SentimentLog],
        start_date: str,
        end_date: str
    ) -> pd.DataFrame:
        """
        Build the daily sentiment table.

        Args:
            logs: Sentiment logs (already filtered by office if needed)
            start_date: First day, YYYY-MM-DD
            end_date: Last day, YYYY-MM-DD

        Returns:
            DataFrame with one row per day: Date, positive, neutral,
            negative, total, positive_pct. Days without data are zeros.
        """
        days = date_range(start_date, end_date)

        rows = [
            {"Date": log.date, "sentiment": log.record.sentiment.value}
            for log in logs
            if start_date <= log.date <= end_date
        ]

        if rows:
            counts = (
                pd.DataFrame(rows)
                .groupby(["Date", "sentiment"])
                .size()
                .unstack(fill_value=0)
            )
        else:
            counts = pd.DataFrame()

        df = counts.reindex(index=days, columns=SENTIMENT_COLUMNS, fill_value=0)
        df = df.fillna(0).astype(int)
        df.index.name = "Date"
        df = df.reset_index()

        df["total"] = df[SENTIMENT_COLUMNS].sum(axis=1)
        df["positive_pct"] = [
            percent_of(positive, total)
            for positive, total in zip(df["positive"], df["total"])
        ]

        logger.info(
            f"Built sentiment trend for {days[0] if days else start_date} to {end_date}: "
            f"{int(df['total'].sum())} classifications over {len(days)} days"
        )

        return df

    def save(self, df: pd.DataFrame, output_dir: str, end_date: str) -> str:
        """
        Write the trend table and its metadata.

        Args:
            df: Table from build()
            output_dir: Directory to save into
            end_date: Last day of the table, used in the file name

        Returns:
            Path to the CSV file
        """
        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"sentiment_trend_{end_date}.csv")
        df.to_csv(output_path, index=False)

        days = list(df["Date"]) if not df.empty else []
        missing_dates = [day for day, total in zip(days, df["total"]) if total == 0] if days else []
        covered = len(days) - len(missing_dates)

        metadata = {
            "date_range": {
                "start": days[0] if days else None,
                "end": days[-1] if days else None
            },
            "missing_dates": missing_dates,
            "coverage": f"{covered}/{len(days)} days ({100 * covered / max(len(days), 1):.1f}%)",
            "total_classifications": int(df["total"].sum()) if days else 0,
            "generated_at": datetime.utcnow().isoformat() + "Z"
        }

        metadata_path = os.path.join(output_dir, f"sentiment_trend_{end_date}_metadata.json")
        with open(metadata_path, 'w') as f:
            json.dump(metadata, f, indent=2)

        logger.info(f"Sentiment trend saved to {output_path} ({covered}/{len(days)} days with data)")

        return output_path
