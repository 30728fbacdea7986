"""Прием команд из очереди Redis и отправка ответов."""

import asyncio
import json
import logging
from typing import Any

from redis.asyncio import Redis

from catalog_service.messaging.dispatcher import CommandDispatcher


class RedisCommandListener:
    """
    Читает запросы из списка Redis и кладет ответы в ключ ответа.

    Формат запроса: {"id": str, "pattern": {"cmd": str}, "data": any}.
    Ответ кладется в список f"{reply_prefix}{id}" с ограниченным сроком
    жизни: {"id", "response"} либо {"id", "err": {"status", "message"}}.
    """

    def __init__(
        self,
        redis: Redis,
        dispatcher: CommandDispatcher,
        queue: str,
        reply_prefix: str,
        reply_ttl: int = 60,
        poll_timeout: float = 1,
    ) -> None:
        self.redis = redis
        self.dispatcher = dispatcher
        self.queue = queue
        self.reply_prefix = reply_prefix
        self.reply_ttl = reply_ttl
        self.poll_timeout = poll_timeout
        self._stopping = asyncio.Event()

    async def handle_raw(self, raw: bytes | str) -> tuple[str, dict[str, Any]] | None:
        """
        Обрабатывает один запрос.

        Returns:
            Пара (ключ ответа, тело ответа) или None, если запрос
            не содержит ID и ответить на него некуда.
        """
        try:
            message = json.loads(raw)
            request_id = str(message["id"])
        except (ValueError, KeyError, TypeError):
            logging.warning("Dropping malformed request: %r", raw)
            return None

        pattern = message.get("pattern")
        cmd = pattern.get("cmd") if isinstance(pattern, dict) else pattern
        reply = await self.dispatcher.process(str(cmd), message.get("data"))

        body: dict[str, Any] = {"id": request_id}
        if reply.ok:
            body["response"] = reply.response
        else:
            body["err"] = reply.error
        return f"{self.reply_prefix}{request_id}", body

    async def process_one(self) -> bool:
        """
        Ждет один запрос из очереди и отвечает на него.

        Returns:
            True, если запрос был получен.
        """
        item = await self.redis.blpop([self.queue], timeout=self.poll_timeout)
        if item is None:
            return False

        _, raw = item
        result = await self.handle_raw(raw)
        if result is None:
            return True

        reply_key, body = result
        await self.redis.rpush(reply_key, json.dumps(body))
        await self.redis.expire(reply_key, self.reply_ttl)
        return True

    async def run(self) -> None:
        """Основной цикл, работает до вызова stop()."""
        logging.info("Listening for commands on %r", self.queue)
        while not self._stopping.is_set():
            try:
                await self.process_one()
            except Exception:
                logging.exception("Error while reading command queue")
                await asyncio.sleep(self.poll_timeout)
        logging.info("Command listener stopped")

    def stop(self) -> None:
        self._stopping.set()
