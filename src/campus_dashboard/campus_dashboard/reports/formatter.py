"""Webhook embed builders for the daily attendance reports."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from ..core.constants import WEBHOOK_FIELD_LIMIT
from .model import AttendanceSummary

GREEN = 65280
YELLOW = 16776960
PURPLE = 5763719
ORANGE = 15844367
RED = 16711680

GOAL_FOOTER = "Campus Learning Dashboard - Daily Report"
REFLECTION_FOOTER = "Campus Learning Dashboard - Evening Report"
ERROR_FOOTER = "Campus Learning Dashboard - Error Report"


def truncate(text: str, limit: int = WEBHOOK_FIELD_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _field(name: str, value: str, inline: bool = False) -> Dict[str, Any]:
    return {"name": name, "value": value, "inline": inline}


def _count_fields(summary: AttendanceSummary, rate_label: str) -> list:
    return [
        _field("✅ Present", f"**{summary.present_count}** students", True),
        _field("❌ Absent", f"**{summary.absent_count}** students", True),
        _field(f"📈 {rate_label}", f"**{summary.percentage_text}%**", True),
    ]


def build_goal_embed(summary: AttendanceSummary, *, timestamp: datetime) -> Dict[str, Any]:
    fields = _count_fields(summary, "Attendance Rate")
    if summary.absent_count:
        fields.append(_field("👥 Absent Students", truncate(", ".join(summary.absent_names))))
    else:
        fields.append(_field("🎉 Perfect Attendance!", "All students have submitted their goals today!"))

    return {
        "title": "🌅 Morning Attendance",
        "description": f"Attendance report for **{summary.report_date.isoformat()}**",
        "color": GREEN if summary.present_count > summary.absent_count else YELLOW,
        "timestamp": timestamp.isoformat(),
        "fields": fields,
        "footer": {"text": GOAL_FOOTER},
    }


def _reflection_tier(summary: AttendanceSummary) -> Dict[str, Any]:
    pct = summary.percentage
    if summary.present_count == summary.total:
        return _field("🎉 Perfect Day!", "All students completed both goals AND reflections today!")
    if pct >= 90:
        return _field("💪 Excellent Work!", "Outstanding completion rate today!")
    if pct >= 75:
        return _field("👍 Good Progress", "Keep up the momentum!")
    if pct >= 50:
        return _field("📝 Reminder", "Encourage students to complete their reflections before day end.")
    return _field("⚠️ Low Completion", "Many students haven't submitted reflections yet. Consider sending reminders.")


def build_reflection_embed(summary: AttendanceSummary, *, timestamp: datetime) -> Dict[str, Any]:
    # Counts only; absent names are not listed in the evening report.
    fields = _count_fields(summary, "Completion Rate")
    fields.append(_reflection_tier(summary))

    return {
        "title": "🌙 Evening Attendance",
        "description": f"Attendance report for **{summary.report_date.isoformat()}**",
        "color": PURPLE if summary.present_count > summary.absent_count else ORANGE,
        "timestamp": timestamp.isoformat(),
        "fields": fields,
        "footer": {"text": REFLECTION_FOOTER},
    }


def build_failure_embed(report_name: str, error: Exception, *, timestamp: datetime) -> Dict[str, Any]:
    return {
        "title": "❌ Daily Report Failed",
        "description": f"An error occurred while generating the {report_name}.",
        "color": RED,
        "fields": [_field("Error", truncate(str(error) or type(error).__name__))],
        "timestamp": timestamp.isoformat(),
        "footer": {"text": ERROR_FOOTER},
    }
