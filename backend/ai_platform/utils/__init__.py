"""
通用工具模块包
提供项目通用的工具函数和辅助类
"""

from .config_utils import (
    get_project_root,
    get_workspace_path,
    get_config_path,
    parse_json_config,
)

from .datetime_utils import (
    get_current_timestamp,
    get_current_timestamp_ms,
    get_current_iso_string,
)

from .string_utils import (
    truncate_string,
    mask_sensitive_info,
)

__all__ = [
    # config_utils
    'get_project_root', 'get_workspace_path', 'get_config_path', 'parse_json_config',

    # datetime_utils
    'get_current_timestamp', 'get_current_timestamp_ms', 'get_current_iso_string',

    # string_utils
    'truncate_string', 'mask_sensitive_info',
]
