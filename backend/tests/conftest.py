"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

根目录conftest.py包含全局共享fixtures，测试不依赖外部服务：
可灵API通过 httpx.MockTransport 或 AsyncMock 替换，轮询等待通过环境变量或patch置零
"""

import pytest

TEST_ACCESS_KEY = "test-access-key-0123456789"
TEST_SECRET_KEY = "test-secret-key-0123456789"


@pytest.fixture(scope="function")
def kling_credentials(monkeypatch):
    """配置可灵API密钥（get_settings 每次调用都会重新读取）"""
    monkeypatch.setenv("KLING_ACCESS_KEY", TEST_ACCESS_KEY)
    monkeypatch.setenv("KLING_SECRET_KEY", TEST_SECRET_KEY)
    monkeypatch.setenv("KLING_BASE_URL", "https://kling.test")
    return {"access_key": TEST_ACCESS_KEY, "secret_key": TEST_SECRET_KEY}


@pytest.fixture(scope="function")
def missing_kling_credentials(monkeypatch):
    """移除可灵API密钥"""
    monkeypatch.setenv("KLING_ACCESS_KEY", "")
    monkeypatch.setenv("KLING_SECRET_KEY", "")


@pytest.fixture(scope="function")
def instant_waits(monkeypatch):
    """轮询间隔和测试模式延迟置零"""
    monkeypatch.setenv("VIDEO_POLL_INTERVAL", "0")
    monkeypatch.setenv("VIDEO_TEST_DELAY", "0")


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "integration: 集成测试")
    config.addinivalue_line("markers", "basic: 基础功能测试")
    config.addinivalue_line("markers", "logging: 日志系统测试")
    config.addinivalue_line("markers", "imports: 模块导入测试")
    config.addinivalue_line("markers", "video: 视频生成相关测试")
    config.addinivalue_line("markers", "kling: 可灵Provider测试")
