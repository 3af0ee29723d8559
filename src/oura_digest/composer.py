"""LINE message formatting for the daily digest.

The template is consumed downstream as-is: section order, the tab and
ideographic-space (U+3000) indentation, and every label are fixed.
"""

from .models import ActivityRecord, SleepRecord, SleepScoreRecord
from .timefmt import format_duration, format_timestamp

NO_DATA_MESSAGE = (
    "⚠データが取得できませんでした!\n"
    "\n"
    "データが同期されていない可能性があります。\n"
    "\n"
    "アプリ上でデータの連携状況\n"
    "及び、リングの残バッテリー量を確認してください!"
)

LOW_BATTERY_MESSAGE = "バッテリー残量が少なくなっています。"
BATTERY_OK_MESSAGE = "バッテリー残量は十分です。"

# Value-line indents under a label
_WIDE4 = "　" * 4
_WIDE5 = "　" * 5
_TIME_INDENT = "\t\t" + _WIDE4
_DURATION_INDENT = "\t\t" + _WIDE5


def battery_status_message(low_battery_alert: bool) -> str:
    return LOW_BATTERY_MESSAGE if low_battery_alert else BATTERY_OK_MESSAGE


def _score(value: int) -> str:
    return f"{value}/100"


def compose(
    activity: ActivityRecord,
    sleep: SleepRecord,
    sleep_score: SleepScoreRecord,
) -> str:
    """Render the digest for one day.

    Only called once all three records are known to exist.
    """
    contributors = sleep_score.contributors
    lines = [
        "■低バッテリーアラート:",
        f"\t{battery_status_message(sleep.low_battery_alert)}",
        "",
        "■睡眠データ:",
        "  ・合計睡眠時間:",
        f"{_WIDE5}{format_duration(sleep.total_sleep_seconds)}",
        f"  ・睡眠効率:\t\t{sleep.efficiency_percent}%",
        "  ・就寝時間:",
        f"{_TIME_INDENT}{format_timestamp(sleep.bedtime_start)}",
        "  ・起床時間:",
        f"{_TIME_INDENT}{format_timestamp(sleep.bedtime_end)}",
        "  ・深い睡眠時間:",
        f"{_DURATION_INDENT}{format_duration(sleep.deep_sleep_seconds)}",
        "  ・浅い睡眠時間:",
        f"{_DURATION_INDENT}{format_duration(sleep.light_sleep_seconds)}",
        "  ・REM睡眠時間:",
        f"{_DURATION_INDENT}{format_duration(sleep.rem_sleep_seconds)}",
        "\t",
        "■睡眠スコアデータ:",
        f"  ・睡眠スコア:\t\t{_score(sleep_score.score)}",
        f"  ・安眠度のスコア:\t\t{_score(contributors.restfulness)}",
        f"  ・睡眠時間のスコア:\t\t{_score(contributors.total_sleep)}",
        f"  ・深い睡眠のスコア:\t\t{_score(contributors.deep_sleep)}",
        f"  ・REM睡眠のスコア:\t\t{_score(contributors.rem_sleep)}",
        "\t",
        "■活動量データ:",
        f"  ・アクティブスコア:\t\t{_score(activity.active_score)}",
        f"  ・総消費カロリー:\t\t{activity.total_calories} kcal",
        "  ・着用していない時間:",
        f"{_DURATION_INDENT}{format_duration(activity.non_wear_seconds)}",
    ]
    return "\n".join(lines)
