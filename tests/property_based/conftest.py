"""
Shared Hypothesis settings for property-based testing.
"""
# 说明：属性测试共享的 Hypothesis 配置。
# - 关闭 deadline，避免大样本采样在慢机器上误报
# - 全局自动恢复配置的 fixture 为函数作用域，不应触发健康检查

from hypothesis import HealthCheck, settings

settings.register_profile(
    "dphist",
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("dphist")
