"""
Unit tests for logging utilities.
"""
# 说明：日志配置与隐私脱敏过滤相关的单元测试。
# 覆盖：
# - PrivacyFilter：true_counts 等敏感字段在开启掩码时被替换为 ***
# - 关闭 mask_sensitive_fields 时保留原值
# - configure_logging(...) / get_logger(...)：挂载过滤器且不重复挂载

import logging

from dphist.core.utils import PrivacyFilter, configure, configure_logging, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("dphist.test", logging.INFO, __file__, 1, "message", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_privacy_filter_masks_true_counts() -> None:
    # 真实计数属于敏感信息，应被掩码；过滤器本身不丢弃日志
    record = _record(true_counts={"A": 10}, payload="raw")
    assert PrivacyFilter().filter(record) is True
    assert record.true_counts == "***"
    assert record.payload == "***"


def test_privacy_filter_respects_config() -> None:
    # 关闭掩码配置后保留原始字段
    configure(mask_sensitive_fields=False)
    record = _record(true_counts={"A": 10})
    PrivacyFilter().filter(record)
    assert record.true_counts == {"A": 10}


def test_configure_logging_installs_filter_once(caplog) -> None:
    # 多次初始化不会重复挂载 PrivacyFilter，logger 仍可正常输出消息
    configure_logging(level="info")
    configure_logging(level="INFO")
    root = logging.getLogger()
    assert sum(isinstance(f, PrivacyFilter) for f in root.filters) == 1
    logger = get_logger("dphist.test")
    with caplog.at_level(logging.INFO):
        logger.info("message", extra={"true_counts": {"A": 10}})
    assert "message" in caplog.text
