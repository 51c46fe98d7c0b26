"""配置文件"""
import logging

logger = logging.getLogger(__name__)

# 解析参数
PARSER_CONFIG = {
    "strict_parentheses": True,  # 括号不匹配时报错；False 则静默吸收
    "power_associativity": "left",  # '^' 与其他操作符一样左结合，2^3^2 = 64
}

# compile() 入口参数
COMPILER_CONFIG = {
    "cache_size": 256,  # 结果缓存条数，0 表示不缓存
}

# 日志
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    if not isinstance(PARSER_CONFIG["strict_parentheses"], bool):
        raise ValueError("strict_parentheses must be a bool")
    if PARSER_CONFIG["power_associativity"] not in ("left", "right"):
        raise ValueError("power_associativity must be 'left' or 'right'")
    cache_size = COMPILER_CONFIG["cache_size"]
    if not isinstance(cache_size, int) or cache_size < 0:
        raise ValueError("cache_size must be a non-negative integer")
    if not isinstance(logging.getLevelName(LOGGING_CONFIG["level"]), int):
        raise ValueError(f"Unknown log level: {LOGGING_CONFIG['level']}")
    logger.debug("Configuration validated successfully!")
