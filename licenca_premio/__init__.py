from .balance import compute_balance, compute_periods
from .timeline import segment_timeline, segment_interval
from .overlap import holder_intervals, intervals_overlap, interval_on, scheduled_days_until
from .anomaly_detector import detect_anomalies
from .period_grouper import group_periods
from .quinquennium import calculate_quinquennia, days_entitled_for
from .usage_aggregator import aggregate_usage
from .date_normalizer import DateStatus, DateValue, normalize_date
from .data_validation import records_from_dataframe
from .auditor import audit_holders
from .errors import ContractViolation, DataIssue
from .models import (
    AcquisitivePeriod,
    BalanceSummary,
    EnjoymentInterval,
    LicenseRecord,
    TimelineBlock,
)
from .shared.utils import parse_int_loose
