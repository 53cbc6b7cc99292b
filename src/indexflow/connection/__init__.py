"""ES 客户端工厂模块 - 统一管理 AsyncElasticsearch 客户端的创建、配置和生命周期.

主要组件:
    - AsyncClientFactory: 客户端工厂，支持多集群管理和异步上下文管理
    - ClusterConfig: 集群配置模型
    - ConnectionConfig: 传输层配置模型
    - ClusterRole: 集群角色枚举

使用示例:
    from indexflow.connection import AsyncClientFactory, ClusterConfig

    factory = AsyncClientFactory([ClusterConfig(hosts=["http://localhost:9200"])])
    client = factory.get_client()
"""

from .exceptions import ClusterNotFoundError, ConnectionConfigError, ESClientFactoryError
from .models import ClusterConfig, ClusterRole, ConnectionConfig
from .tool import AsyncClientFactory

__all__ = [
    # 工厂
    "AsyncClientFactory",
    # 模型
    "ClusterConfig",
    "ConnectionConfig",
    "ClusterRole",
    # 异常
    "ESClientFactoryError",
    "ConnectionConfigError",
    "ClusterNotFoundError",
]
