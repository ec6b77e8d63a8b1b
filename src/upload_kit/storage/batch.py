"""批量操作执行器

固定大小的线程池并发执行相互独立的对象存储操作，结果与输入一一对应。
单项失败不会影响其它操作。
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_MAX_CONCURRENCY
from ..errors import Reason, StorageError
from .base import OperationResult

logger = logging.getLogger(__name__)


@dataclass
class Operation:
    """一个待执行的操作，call 返回后端原始响应"""

    key: str
    name: str
    call: Callable[[], dict[str, Any]]


class BatchExecutor:
    """有界并发的批量执行器"""

    def __init__(self, max_workers: int = DEFAULT_MAX_CONCURRENCY):
        if max_workers < 1:
            raise ValueError(f"max_workers 必须为正整数: {max_workers}")
        self.max_workers = max_workers

    def run(self, operations: Sequence[Operation]) -> list[OperationResult]:
        if not operations:
            return []

        workers = min(self.max_workers, len(operations))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="upload-batch"
        ) as pool:
            futures = [pool.submit(self._execute, op) for op in operations]
            results = [f.result() for f in futures]

        failed = sum(1 for r in results if not r.ok)
        logger.info("批量操作完成: total=%d failed=%d", len(results), failed)
        return results

    @staticmethod
    def _execute(op: Operation) -> OperationResult:
        try:
            response = op.call()
        except StorageError as e:
            logger.warning("%s 失败 %s: %s", op.name, op.key, e)
            return OperationResult(
                key=op.key, operation=op.name, reason=e.reason, exception=e
            )
        except Exception as e:  # noqa: BLE001 - 单项失败记录到结果中
            logger.warning("%s 失败 %s: %s", op.name, op.key, e)
            return OperationResult(
                key=op.key, operation=op.name, reason=Reason.REMOTE_FAILED, exception=e
            )
        return OperationResult(key=op.key, operation=op.name, response=response)
