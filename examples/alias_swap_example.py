"""索引重建与别名切换使用示例.

本文件展示了一个典型的全量加载流程：
创建时间戳索引 -> 批量写入 -> 强制合并 -> 原子切换别名 -> 清理过期索引。
"""

import asyncio
import logging

from indexflow import ElasticTools
from indexflow.connection import AsyncClientFactory, ClusterConfig, ConnectionConfig

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

ALIAS = "books"

MAPPING = {
    "mappings": {
        "properties": {
            "title": {"type": "text"},
            "author": {"type": "keyword"},
            "year": {"type": "integer"},
        }
    }
}

SETTINGS = {"settings": {"number_of_shards": 1, "number_of_replicas": 0}}

BOOKS = [
    ("1", {"title": "三体", "author": "刘慈欣", "year": 2008}),
    ("2", {"title": "活着", "author": "余华", "year": 1993}),
    ("3", {"title": "围城", "author": "钱锺书", "year": 1947}),
]


# ==================== 示例1：全量加载并切换别名 ====================
async def example_reload(tools: ElasticTools) -> str:
    """创建新索引、写入数据并把别名切换过去."""
    index_name = await tools.create_timestamped_index(ALIAS, MAPPING, SETTINGS)
    print(f"  新索引: {index_name}")

    outcome = await tools.index_document_bulk(index_name, None, BOOKS)
    print(f"  新建: {len(outcome.created)}, 更新: {len(outcome.updated)}")
    if not outcome.is_success():
        print(f"  错误摘要:\n{outcome.get_error_summary()}")

    # 合并失败不影响后续流程
    await tools.optimize_index(index_name)

    await tools.set_alias_to_single_index(ALIAS, index_name)
    print(f"  别名 '{ALIAS}' 当前指向: {await tools.get_indices_for_alias(ALIAS)}")
    return index_name


# ==================== 示例2：清理过期索引 ====================
async def example_cleanup(tools: ElasticTools) -> None:
    """先试运行查看待删除索引，再实际清理."""
    candidates = await tools.cleanup_old_indices(ALIAS, days_to_keep=5, dry_run=True)
    print(f"  待删除: {candidates}")

    deleted = await tools.cleanup_old_indices(ALIAS, days_to_keep=5)
    print(f"  已删除: {deleted}")


# ==================== 主函数 ====================
async def main():
    """运行所有示例."""
    clusters = [ClusterConfig(hosts=["http://localhost:9200"])]

    async with AsyncClientFactory(clusters, ConnectionConfig(request_timeout=30)) as factory:
        tools = ElasticTools(factory.get_write_client())

        print("\n1. 全量加载并切换别名")
        print("-" * 50)
        await example_reload(tools)

        print("\n2. 清理过期索引")
        print("-" * 50)
        await example_cleanup(tools)


if __name__ == "__main__":
    asyncio.run(main())
