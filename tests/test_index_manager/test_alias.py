"""别名查询与原子切换单元测试."""

import unittest
from unittest.mock import AsyncMock, MagicMock

from elasticsearch import ApiError, NotFoundError

from helpers import api_error
from indexflow.exceptions import InvalidArgumentError
from indexflow.index_manager import AliasUpdate, IndexManager
from indexflow.index_manager.exceptions import AliasQueryError, AliasUpdateError


class FakeAliasCluster:
    """在内存中模拟别名绑定，按请求中的动作顺序应用 update_aliases."""

    def __init__(self, bindings=None):
        self.bindings = {alias: list(indices) for alias, indices in (bindings or {}).items()}
        self.requests = []

    async def get_alias(self, name):
        indices = self.bindings.get(name, [])
        if not indices:
            raise api_error(NotFoundError, 404, f"alias [{name}] missing")
        return {index: {"aliases": {name: {}}} for index in indices}

    async def update_aliases(self, actions):
        self.requests.append(actions)
        for action in actions:
            (kind, params), = action.items()
            current = self.bindings.setdefault(params["alias"], [])
            for index in params["indices"]:
                if kind == "add" and index not in current:
                    current.append(index)
                elif kind == "remove" and index in current:
                    current.remove(index)
        return {"acknowledged": True}


class TestGetIndicesForAlias(unittest.IsolatedAsyncioTestCase):
    """get_indices_for_alias 方法测试."""

    def setUp(self):
        """设置测试环境."""
        self.es_client = MagicMock()
        self.es_client.indices.get_alias = AsyncMock()
        self.manager = IndexManager(self.es_client)

    async def test_returns_indices(self):
        """测试返回别名指向的索引."""
        self.es_client.indices.get_alias.return_value = {
            "logs_20240101000000": {"aliases": {"logs": {}}},
            "logs_20240102000000": {"aliases": {"logs": {}}},
        }

        indices = await self.manager.get_indices_for_alias("logs")

        self.assertEqual(indices, ["logs_20240101000000", "logs_20240102000000"])
        self.es_client.indices.get_alias.assert_awaited_once_with(name="logs")

    async def test_not_found_returns_empty(self):
        """测试别名不存在（404）时返回空列表且不记录错误."""
        self.es_client.indices.get_alias.side_effect = api_error(NotFoundError, 404, "missing")

        indices = await self.manager.get_indices_for_alias("logs")

        self.assertEqual(indices, [])

    async def test_server_error_raises(self):
        """测试其他错误时抛出 AliasQueryError."""
        self.es_client.indices.get_alias.side_effect = api_error(ApiError, 500, "boom")

        with self.assertLogs("indexflow", level="ERROR"):
            with self.assertRaises(AliasQueryError) as ctx:
                await self.manager.get_indices_for_alias("logs")

        self.assertEqual(ctx.exception.target, "logs")
        self.assertEqual(ctx.exception.status_code, 500)


class TestUpdateAlias(unittest.IsolatedAsyncioTestCase):
    """update_alias 方法测试."""

    def setUp(self):
        """设置测试环境."""
        self.es_client = MagicMock()
        self.es_client.indices.update_aliases = AsyncMock(return_value={"acknowledged": True})
        self.manager = IndexManager(self.es_client)

    def _sent_actions(self):
        self.es_client.indices.update_aliases.assert_awaited_once()
        return self.es_client.indices.update_aliases.call_args.kwargs["actions"]

    async def test_requires_add_or_remove(self):
        """测试 add 与 remove 都为空时抛出异常."""
        with self.assertRaises(InvalidArgumentError):
            await self.manager.update_alias("logs")
        with self.assertRaises(InvalidArgumentError):
            await self.manager.update_alias("logs", add=[], remove=[])
        self.es_client.indices.update_aliases.assert_not_awaited()

    async def test_rejects_invalid_types(self):
        """测试 add/remove 类型不合法时抛出异常."""
        with self.assertRaises(InvalidArgumentError):
            await self.manager.update_alias("logs", add=1)
        with self.assertRaises(InvalidArgumentError):
            await self.manager.update_alias("logs", remove=object())
        self.es_client.indices.update_aliases.assert_not_awaited()

    async def test_add_one(self):
        """测试添加一个索引（字符串）."""
        result = await self.manager.update_alias("logs", add="logs_1")

        self.assertTrue(result)
        self.assertEqual(self._sent_actions(), [{"add": {"indices": ["logs_1"], "alias": "logs"}}])

    async def test_remove_many(self):
        """测试移除多个索引."""
        await self.manager.update_alias("logs", remove=["logs_1", "logs_2"])

        self.assertEqual(
            self._sent_actions(),
            [{"remove": {"indices": ["logs_1", "logs_2"], "alias": "logs"}}],
        )

    async def test_swap_many_for_many_in_one_request(self):
        """测试多对多切换在同一个请求中提交，add 在前."""
        await self.manager.update_alias(
            "logs", add=["logs_3", "logs_4"], remove=["logs_1", "logs_2"]
        )

        self.assertEqual(
            self._sent_actions(),
            [
                {"add": {"indices": ["logs_3", "logs_4"], "alias": "logs"}},
                {"remove": {"indices": ["logs_1", "logs_2"], "alias": "logs"}},
            ],
        )

    async def test_accepts_alias_update_object(self):
        """测试传入 AliasUpdate 参数对象."""
        await self.manager.update_alias("logs", update=AliasUpdate(add="logs_2", remove="logs_1"))

        self.assertEqual(
            self._sent_actions(),
            [
                {"add": {"indices": ["logs_2"], "alias": "logs"}},
                {"remove": {"indices": ["logs_1"], "alias": "logs"}},
            ],
        )

    async def test_server_error_raises(self):
        """测试集群拒绝时抛出 AliasUpdateError."""
        self.es_client.indices.update_aliases.side_effect = api_error(ApiError, 400, "bad")

        with self.assertLogs("indexflow", level="ERROR"):
            with self.assertRaises(AliasUpdateError) as ctx:
                await self.manager.update_alias("logs", add="logs_1")

        self.assertEqual(ctx.exception.target, "logs")

    async def test_empty_alias_name_raises(self):
        """测试别名为空时不发送请求."""
        for alias_name in ("", None):
            with self.subTest(alias_name=alias_name):
                with self.assertRaises(InvalidArgumentError):
                    await self.manager.update_alias(alias_name, add="logs_1")

        self.es_client.indices.update_aliases.assert_not_awaited()


class TestSetAliasToSingleIndex(unittest.IsolatedAsyncioTestCase):
    """set_alias_to_single_index 方法测试."""

    def _manager_for(self, cluster):
        es_client = MagicMock()
        es_client.indices.get_alias = AsyncMock(side_effect=cluster.get_alias)
        es_client.indices.update_aliases = AsyncMock(side_effect=cluster.update_aliases)
        return IndexManager(es_client)

    async def test_no_existing_bindings(self):
        """测试别名尚无绑定时只发送一个 add 动作."""
        cluster = FakeAliasCluster()
        manager = self._manager_for(cluster)

        await manager.set_alias_to_single_index("logs", "logs_20240101000000")

        self.assertEqual(
            cluster.requests,
            [[{"add": {"indices": ["logs_20240101000000"], "alias": "logs"}}]],
        )
        self.assertEqual(
            await manager.get_indices_for_alias("logs"), ["logs_20240101000000"]
        )

    async def test_resolves_to_single_index_for_any_prior_state(self):
        """测试无论此前绑定 0、1 或多个索引，切换后只指向目标索引."""
        prior_states = [
            [],
            ["logs_1"],
            ["logs_1", "logs_2", "logs_3"],
            ["logs_new"],
            ["logs_1", "logs_new"],
        ]
        for prior in prior_states:
            with self.subTest(prior=prior):
                cluster = FakeAliasCluster({"logs": prior})
                manager = self._manager_for(cluster)

                await manager.set_alias_to_single_index("logs", "logs_new")

                self.assertEqual(await manager.get_indices_for_alias("logs"), ["logs_new"])
                self.assertEqual(len(cluster.requests), 1)

    async def test_swap_removes_old_in_same_request(self):
        """测试新旧索引的添加与移除在同一个请求中."""
        cluster = FakeAliasCluster({"logs": ["logs_1", "logs_2"]})
        manager = self._manager_for(cluster)

        await manager.set_alias_to_single_index("logs", "logs_3")

        self.assertEqual(
            cluster.requests,
            [
                [
                    {"add": {"indices": ["logs_3"], "alias": "logs"}},
                    {"remove": {"indices": ["logs_1", "logs_2"], "alias": "logs"}},
                ]
            ],
        )

    async def test_query_failure_propagates(self):
        """测试读取别名失败时不发送更新请求."""
        es_client = MagicMock()
        es_client.indices.get_alias = AsyncMock(side_effect=api_error(ApiError, 500, "boom"))
        es_client.indices.update_aliases = AsyncMock()
        manager = IndexManager(es_client)

        with self.assertLogs("indexflow", level="ERROR"):
            with self.assertRaises(AliasQueryError):
                await manager.set_alias_to_single_index("logs", "logs_2")

        es_client.indices.update_aliases.assert_not_awaited()

    async def test_update_failure_propagates(self):
        """测试更新别名失败时向上抛出异常."""
        cluster = FakeAliasCluster({"logs": ["logs_1"]})
        es_client = MagicMock()
        es_client.indices.get_alias = AsyncMock(side_effect=cluster.get_alias)
        es_client.indices.update_aliases = AsyncMock(side_effect=api_error(ApiError, 400, "bad"))
        manager = IndexManager(es_client)

        with self.assertLogs("indexflow", level="ERROR"):
            with self.assertRaises(AliasUpdateError):
                await manager.set_alias_to_single_index("logs", "logs_2")

        self.assertEqual(cluster.bindings["logs"], ["logs_1"])

    async def test_empty_target_keeps_alias_bound(self):
        """测试目标索引为空时既不读取也不修改别名，原有绑定保持不变."""
        cluster = FakeAliasCluster({"logs": ["logs_1"]})
        manager = self._manager_for(cluster)

        for index_name in ("", None, ["logs_2"]):
            with self.subTest(index_name=index_name):
                with self.assertRaises(InvalidArgumentError):
                    await manager.set_alias_to_single_index("logs", index_name)

        with self.assertRaises(InvalidArgumentError):
            await manager.set_alias_to_single_index("", "logs_2")

        self.assertEqual(cluster.requests, [])
        self.assertEqual(cluster.bindings["logs"], ["logs_1"])


if __name__ == "__main__":
    unittest.main()
