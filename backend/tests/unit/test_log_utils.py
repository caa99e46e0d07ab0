"""
日志系统单元测试
快速执行，无外部依赖

测试 UnifiedLogger 的消息渲染、结构化数据和调试开关
"""

import logging
from unittest.mock import patch

import pytest

from ai_platform.core.log_utils import UnifiedLogger, get_logger
from ai_platform.core.log_messages import LogMessages, log_messages


@pytest.mark.unit
@pytest.mark.logging
class TestUnifiedLogger:
    """UnifiedLogger 单元测试类"""

    def setup_method(self):
        self.logger_name = "test_video_logger"
        self.unified_logger = UnifiedLogger(self.logger_name)

    def test_init(self):
        assert self.unified_logger.name == self.logger_name
        assert isinstance(self.unified_logger.logger, logging.Logger)
        assert self.unified_logger.logger.name == self.logger_name

    def test_info_without_parameters(self):
        """无格式化参数时消息原样输出"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info("开始注册所有AI Provider")

            call_args = mock_info.call_args
            assert call_args[0][0] == "开始注册所有AI Provider"
            assert call_args[1]['extra'] == {"log_module": self.logger_name}

    def test_info_renders_template(self):
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info(
                log_messages.VIDEO_TASK_POLLING,
                attempt=3,
                max_attempts=30,
                task_status="processing"
            )

            call_args = mock_info.call_args
            assert call_args[0][0] == "任务状态检查 (3/30): processing"
            assert call_args[1]['extra']['attempt'] == 3
            assert call_args[1]['extra']['task_status'] == "processing"

    def test_braces_without_parameters_not_formatted(self):
        """已格式化的包含字典的消息不会二次格式化"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            payload = {"model_name": "kling-v1", "duration": "5"}
            message = f"提交可灵视频任务: {payload}"

            self.unified_logger.info(message)

            assert mock_info.call_args[0][0] == message

    def test_missing_template_parameter_falls_back(self):
        with patch.object(self.unified_logger.logger, 'warning') as mock_warning:
            self.unified_logger.warning(log_messages.VIDEO_FALLBACK, wrong_param="x")

            assert mock_warning.call_args[0][0] == log_messages.VIDEO_FALLBACK

    def test_error_with_exception(self):
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            error = ValueError("任务失败: 内容审核未通过")

            self.unified_logger.error(
                log_messages.OPERATION_FAILED,
                exception=error,
                operation_name="视频生成"
            )

            call_args = mock_error.call_args
            assert call_args[0][0] == "操作执行失败: 视频生成"
            assert call_args[1]['extra']['exception_type'] == 'ValueError'
            assert call_args[1]['extra']['exception_message'] == "任务失败: 内容审核未通过"
            assert call_args[1]['exc_info'] is error

    def test_error_without_exception(self):
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            self.unified_logger.error(log_messages.PROVIDER_CONFIG_MISSING)

            call_args = mock_error.call_args
            assert call_args[0][0] == "可灵API配置缺失"
            assert 'exc_info' not in call_args[1]

    @patch('ai_platform.core.log_utils.settings')
    def test_debug_when_debug_enabled(self, mock_settings):
        mock_settings.app_debug = True

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug(log_messages.PROVIDER_REQUEST, method="GET", endpoint="/v1/videos/text2video/t1")

            assert mock_debug.call_args[0][0] == "调用可灵API: GET /v1/videos/text2video/t1"

    @patch('ai_platform.core.log_utils.settings')
    def test_debug_when_debug_disabled(self, mock_settings):
        mock_settings.app_debug = False

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug("调试消息")

            mock_debug.assert_not_called()

    def test_critical(self):
        with patch.object(self.unified_logger.logger, 'critical') as mock_critical:
            self.unified_logger.critical("严重错误")

            mock_critical.assert_called_once()

    def test_extra_does_not_clash_with_log_record(self):
        """结构化数据可以直接写入真实的 LogRecord"""
        records = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = ListHandler()
        self.unified_logger.logger.addHandler(handler)
        self.unified_logger.logger.setLevel(logging.INFO)
        try:
            self.unified_logger.info(log_messages.VIDEO_TASK_SUBMITTED, task_id="t-1", task_kind="text2video")
        finally:
            self.unified_logger.logger.removeHandler(handler)

        assert records[0].getMessage() == "视频任务已提交: t-1 (text2video)"
        assert records[0].task_id == "t-1"
        assert records[0].log_module == self.logger_name


@pytest.mark.unit
@pytest.mark.logging
class TestGetLogger:
    """get_logger 工厂函数"""

    def test_returns_unified_logger(self):
        logger = get_logger("video_module")

        assert isinstance(logger, UnifiedLogger)
        assert logger.name == "video_module"

    def test_caching(self):
        assert get_logger("video_module") is get_logger("video_module")

    def test_different_names(self):
        assert get_logger("module1") is not get_logger("module2")


@pytest.mark.unit
@pytest.mark.logging
class TestLogMessages:
    """LogMessages 模板"""

    def test_format_message(self):
        result = LogMessages.format_message(
            LogMessages.VIDEO_REQUEST_RECEIVED,
            model="kling-v1",
            prompt_preview="A cat on a skateboard"
        )
        assert result == "收到视频生成请求: kling-v1 - A cat on a skateboard"

    def test_get_structured_data(self):
        assert LogMessages.get_structured_data(task_id="t-1", attempt=2) == {"task_id": "t-1", "attempt": 2}
