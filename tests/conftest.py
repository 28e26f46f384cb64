"""
pytest 配置文件

提供測試環境設定、fixtures 和全局配置
"""

import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# 添加 src 目錄到 Python 路徑
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# 載入環境變數
load_dotenv()


class RecordingLogger:
    """記錄所有呼叫的假 ToolLogger"""

    def __init__(self):
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def log_request(self, operation, meta):
        self._record("log_request", operation, meta)

    def log_response(self, operation, duration_ms, meta):
        self._record("log_response", operation, duration_ms, meta)

    def log_error(self, operation, error, meta):
        self._record("log_error", operation, error, meta)

    def log_performance(self, operation, duration_ms, meta=None):
        self._record("log_performance", operation, duration_ms, meta)

    def warn(self, message, meta=None):
        self._record("warn", message, meta)

    def named(self, name):
        """回傳指定方法的所有呼叫"""
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_logger():
    """假 logger fixture"""
    return RecordingLogger()


@pytest.fixture(autouse=True)
def reset_dependency_singletons():
    """每個測試前後重置單例"""
    from core.dependencies import reset_singletons
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def handler_context():
    """範例 HandlerContext fixture"""
    from tools.types import HandlerContext
    return HandlerContext(
        operation="test-operation",
        tool="test-tool",
        user_id="user123",
        request_id="req456",
    )


@pytest.fixture
def expected_meta():
    """handler_context 對應的日誌 metadata"""
    return {"tool": "test-tool", "userId": "user123", "requestId": "req456"}
