"""
日志消息模板模块
统一管理所有业务日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用日志消息 ====================
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"
    OPERATION_FAILED = "操作执行失败: {operation_name}"

    # ==================== 视频生成相关 ====================
    VIDEO_REQUEST_RECEIVED = "收到视频生成请求: {model} - {prompt_preview}"
    VIDEO_TASK_SUBMITTED = "视频任务已提交: {task_id} ({task_kind})"
    VIDEO_TASK_POLLING = "任务状态检查 ({attempt}/{max_attempts}): {task_status}"
    VIDEO_TASK_SUCCEEDED = "视频生成成功: {task_id}"
    VIDEO_TASK_FAILED = "视频任务失败: {task_id}"
    VIDEO_TASK_TIMEOUT = "视频任务超时: {task_id}"
    VIDEO_FALLBACK = "API失败，使用降级视频: {fallback_url}"
    VIDEO_TEST_MODE = "检测到测试模式，模拟{delay}秒延迟"

    # ==================== Provider相关 ====================
    PROVIDER_REQUEST = "调用可灵API: {method} {endpoint}"
    PROVIDER_REQUEST_FAILED = "可灵API调用失败: {endpoint}"
    PROVIDER_CONFIG_MISSING = "可灵API配置缺失"

    # ==================== 业务验证相关 ====================
    VALIDATION_FAILED = "验证失败"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
