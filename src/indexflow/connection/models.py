"""ES 客户端工厂数据模型定义模块."""

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ConnectionConfigError


class ClusterRole(Enum):
    """集群角色枚举.

    Attributes:
        MASTER: 主集群，默认角色，读写均可
        READ: 只读集群
        WRITE: 只写集群
    """

    MASTER = "master"
    READ = "read"
    WRITE = "write"


@dataclass
class ClusterConfig:
    """单个集群的连接信息.

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        role: 集群角色，默认 MASTER
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或 (id, key) 元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空时抛出

    Examples:
        >>> config = ClusterConfig(hosts=["http://localhost:9200"], api_key="xxx")
    """

    hosts: list[str] = field(default_factory=list)
    role: ClusterRole = ClusterRole.MASTER
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")


@dataclass
class ConnectionConfig:
    """客户端传输层配置.

    客户端层面的 max_retries 只作用于传输层（连接失败、节点切换），
    索引生命周期操作本身不做任何重试。

    Attributes:
        max_retries: 传输层最大重试次数，默认 3
        retry_on_timeout: 超时是否由传输层重试，默认 False
        request_timeout: 默认请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True

    Raises:
        ConnectionConfigError: 当参数不合法时抛出
    """

    max_retries: int = 3
    retry_on_timeout: bool = False
    request_timeout: int = 30
    http_compress: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ConnectionConfigError(f"max_retries 必须 >= 0，当前值: {self.max_retries}")
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
