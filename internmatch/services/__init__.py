"""Service layer for internmatch integrations."""

from internmatch.services.preferences import parse_student_preference_signals
from internmatch.services.preview_service import (
    build_internship_preview_item,
    build_student_preview_option,
    evaluate_single_preview_match,
    filter_internship_rows,
    rank_internships_for_student_preview,
    search_student_options,
)
from internmatch.services.report_service import build_matching_report_model
from internmatch.services.snapshot_service import build_application_match_snapshot

__all__ = [
    "parse_student_preference_signals",
    "build_internship_preview_item",
    "build_student_preview_option",
    "evaluate_single_preview_match",
    "filter_internship_rows",
    "rank_internships_for_student_preview",
    "search_student_options",
    "build_matching_report_model",
    "build_application_match_snapshot",
]
