"""时间戳索引命名工具单元测试."""

import re
import unittest
from datetime import datetime, timedelta, timezone, UTC

from indexflow.index_manager.naming import (
    parse_timestamped_name,
    start_of_day,
    timestamped_name,
    to_epoch_millis,
    utc_now,
)


class TestTimestampedName(unittest.TestCase):
    """timestamped_name 函数测试."""

    def test_format(self):
        """测试名称格式."""
        name = timestamped_name("logs", datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))
        self.assertEqual(name, "logs_20240102030405")

    def test_naive_datetime_treated_as_utc(self):
        """测试 naive datetime 视为 UTC."""
        name = timestamped_name("logs", datetime(2024, 1, 2, 3, 4, 5))
        self.assertEqual(name, "logs_20240102030405")

    def test_aware_datetime_converted_to_utc(self):
        """测试带时区的时间先转换为 UTC."""
        tz = timezone(timedelta(hours=8))
        name = timestamped_name("logs", datetime(2024, 1, 2, 8, 0, 0, tzinfo=tz))
        self.assertEqual(name, "logs_20240102000000")

    def test_default_now(self):
        """测试默认使用当前时间."""
        before = utc_now().replace(microsecond=0)
        name = timestamped_name("books")
        after = utc_now()

        self.assertRegex(name, re.compile(r"^books_\d{14}$"))
        _, moment = parse_timestamped_name(name)
        self.assertGreaterEqual(moment, before)
        self.assertLessEqual(moment, after)

    def test_same_second_collides(self):
        """测试同一秒内生成的名称相同（不做去重）."""
        moment = datetime(2024, 1, 1, tzinfo=UTC)
        self.assertEqual(
            timestamped_name("logs", moment),
            timestamped_name("logs", moment.replace(microsecond=999)),
        )


class TestParseTimestampedName(unittest.TestCase):
    """parse_timestamped_name 函数测试."""

    def test_parse(self):
        """测试解析时间戳名称."""
        prefix, moment = parse_timestamped_name("app_logs_20240101123000")
        self.assertEqual(prefix, "app_logs")
        self.assertEqual(moment, datetime(2024, 1, 1, 12, 30, tzinfo=UTC))

    def test_parse_not_timestamped(self):
        """测试非时间戳名称返回 None."""
        self.assertIsNone(parse_timestamped_name("logs"))
        self.assertIsNone(parse_timestamped_name("logs_2024"))
        self.assertIsNone(parse_timestamped_name("logs_20241399000000"))


class TestTimeHelpers(unittest.TestCase):
    """时间辅助函数测试."""

    def test_start_of_day(self):
        """测试截断到当天零点."""
        result = start_of_day(datetime(2024, 1, 5, 15, 30, 12, 345, tzinfo=UTC))
        self.assertEqual(result, datetime(2024, 1, 5, tzinfo=UTC))

    def test_to_epoch_millis(self):
        """测试毫秒时间戳转换."""
        self.assertEqual(to_epoch_millis(datetime(2024, 1, 5, tzinfo=UTC)), 1704412800000)


if __name__ == "__main__":
    unittest.main()
