from .errors import StatisticsError, InvalidRangeError, StoreUnavailableError
from .windows import TimeWindow, Weekday, resolve_week, resolve_month, resolve_range, resolve_trailing
from .aggregator import Totals, Aggregate, aggregate, reduce_records
from .store import ActivityRecord, ActiveGoal, RecordKind, RecordStore, BeanieRecordStore
from .progress import ProgressMetric, percentage
from .service import StatisticsService
