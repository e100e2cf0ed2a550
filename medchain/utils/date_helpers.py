from datetime import datetime, timezone

UNKNOWN_DATE = 'Unknown'
DATE_FORMAT = '%d/%m/%Y'
DATETIME_FORMAT = '%d/%m/%Y %H:%M:%S'


class DateHelpersUtils:
    @staticmethod
    def from_epoch(epoch: int) -> datetime:
        """Convert ledger epoch seconds to an aware UTC datetime"""
        return datetime.fromtimestamp(int(epoch), tz=timezone.utc)

    @staticmethod
    def format_epoch(epoch: int, format_string: str = DATETIME_FORMAT) -> str:
        """Format ledger epoch seconds for display; zero means the field was never set"""
        if not epoch:
            return UNKNOWN_DATE
        return DateHelpersUtils.from_epoch(epoch).strftime(format_string)

    @staticmethod
    def format_epoch_date(epoch: int) -> str:
        return DateHelpersUtils.format_epoch(epoch, DATE_FORMAT)

    @staticmethod
    def get_current_utc() -> datetime:
        """Get current UTC datetime"""
        return datetime.now(timezone.utc)


date_helper_utils = DateHelpersUtils
