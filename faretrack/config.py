"""Configuration utilities.

Central place to load environment driven settings (data paths, report thresholds, email credentials).
Avoids scattering os.getenv calls around the codebase. The analytics modules never read these;
the pipeline passes the values in explicitly.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


@dataclass(slots=True)
class Settings:
    src_mail: str | None = os.getenv("SRC_MAIL")
    src_pwd: str | None = os.getenv("SRC_PWD")
    dst_mail: str | None = os.getenv("DST_MAIL")
    data_json: Path = Path(os.getenv("DATA_JSON", "data/flights.json"))
    output_html: Path = Path(os.getenv("OUTPUT_HTML", "flights.html"))
    price_low: int = int(os.getenv("PRICE_LOW", "300"))
    price_high: int = int(os.getenv("PRICE_HIGH", "550"))
    top_picks: int = int(os.getenv("TOP_PICKS", "3"))
    recent_window_days: int = int(os.getenv("RECENT_WINDOW_DAYS", "7"))
    history_points: int = int(os.getenv("HISTORY_POINTS", "14"))

    def email_configured(self) -> bool:
        return all([self.src_mail, self.src_pwd, self.dst_mail])


settings = Settings()
