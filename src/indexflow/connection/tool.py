"""异步 ES 客户端工厂工具模块.

使用示例:
    from indexflow.connection import AsyncClientFactory, ClusterConfig

    async with AsyncClientFactory([ClusterConfig(hosts=["http://localhost:9200"])]) as factory:
        client = factory.get_client()
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch

from .exceptions import ClusterNotFoundError, ConnectionConfigError
from .models import ClusterConfig, ClusterRole, ConnectionConfig

logger = logging.getLogger(__name__)


class AsyncClientFactory:
    """AsyncElasticsearch 客户端工厂.

    按集群角色惰性创建并缓存客户端，支持多认证方式和异步上下文管理器。

    Attributes:
        _clusters: 集群配置列表
        _connection_config: 传输层配置
        _clients: 按集群角色缓存的客户端字典
    """

    def __init__(
        self,
        clusters: list[ClusterConfig],
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        if not clusters:
            raise ConnectionConfigError("clusters 不能为空，请提供至少一个集群配置")
        self._clusters = clusters
        self._connection_config = connection_config or ConnectionConfig()
        self._clients: dict[ClusterRole, AsyncElasticsearch] = {}

    def _build_client_kwargs(self, cluster_config: ClusterConfig) -> dict[str, Any]:
        """根据集群配置组装 AsyncElasticsearch 的构造参数."""
        kwargs: dict[str, Any] = {
            "hosts": cluster_config.hosts,
            "max_retries": self._connection_config.max_retries,
            "retry_on_timeout": self._connection_config.retry_on_timeout,
            "request_timeout": self._connection_config.request_timeout,
            "http_compress": self._connection_config.http_compress,
            "verify_certs": cluster_config.verify_certs,
        }

        if cluster_config.username and cluster_config.password:
            kwargs["basic_auth"] = (cluster_config.username, cluster_config.password)
        if cluster_config.api_key:
            kwargs["api_key"] = cluster_config.api_key
        if cluster_config.bearer_token:
            kwargs["bearer_auth"] = cluster_config.bearer_token
        if cluster_config.ca_certs:
            kwargs["ca_certs"] = cluster_config.ca_certs

        return kwargs

    def _create_client(self, cluster_config: ClusterConfig) -> AsyncElasticsearch:
        logger.info(
            f"创建 {cluster_config.role.value} 集群客户端: {', '.join(cluster_config.hosts)}"
        )
        return AsyncElasticsearch(**self._build_client_kwargs(cluster_config))

    def _get_or_create(self, cluster_config: ClusterConfig) -> AsyncElasticsearch:
        if cluster_config.role not in self._clients:
            self._clients[cluster_config.role] = self._create_client(cluster_config)
        return self._clients[cluster_config.role]

    def get_client(self, role: ClusterRole | None = None) -> AsyncElasticsearch:
        """获取指定角色的客户端.

        role 为 None 时优先返回 MASTER 角色的客户端，不存在 MASTER 时返回第一个集群的客户端。

        Args:
            role: 集群角色，默认 None

        Returns:
            AsyncElasticsearch 客户端实例

        Raises:
            ClusterNotFoundError: 当指定角色的集群不存在时抛出
        """
        if role is None:
            for cluster in self._clusters:
                if cluster.role == ClusterRole.MASTER:
                    return self._get_or_create(cluster)
            return self._get_or_create(self._clusters[0])

        for cluster in self._clusters:
            if cluster.role == role:
                return self._get_or_create(cluster)

        raise ClusterNotFoundError(f"未找到角色为 {role.value} 的集群配置")

    def get_write_client(self) -> AsyncElasticsearch:
        """获取写集群客户端，不存在 WRITE 角色时回退到默认客户端."""
        try:
            return self.get_client(ClusterRole.WRITE)
        except ClusterNotFoundError:
            return self.get_client()

    async def close(self) -> None:
        """关闭所有已创建的客户端并清空缓存."""
        for role, client in self._clients.items():
            try:
                await client.close()
            except Exception as e:
                logger.warning(f"关闭 {role.value} 集群客户端失败: {str(e)}")
        self._clients.clear()

    async def __aenter__(self) -> AsyncClientFactory:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
