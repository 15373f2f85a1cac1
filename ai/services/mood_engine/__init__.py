from .models import JournalEntry, MoodCheckIn, CalendarCell, WeekDay, TrendPoint, Insight, MOODS, TAGS
from .local_day import local_day_key
from .store import EntryStore, MoodLog, JournalState
from .monthly import calendar_cells_for_month, day_detail, shift_month, month_title
from .weekly import week_series, trend_series, mood_distribution, distribution_chart
from .insights import insights
