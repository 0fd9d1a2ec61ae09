"""Nutrition coach chat backed by a hosted language model."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from food_diary.domain.chat import ChatMessage, CoachReply, ReplyStatus, Sender

logger = logging.getLogger(__name__)

COACH_INSTRUCTIONS = """\
You are a cheerful, friendly, and knowledgeable Personal Nutrition Coach named \
'โค้ชกะทิ' (Coach Kathi).
Your goal is to help users plan healthy meals, check calories, and stay motivated.

Rules:
1. Always reply in Thai language.
2. Keep your answers concise (2-3 sentences max) unless asked for a list.
3. Use cute emojis (🥗, 🥑, ✨, 💪) to make the conversation fun.
4. If asked for meal suggestions, provide specific examples with approximate \
calories.
5. Be encouraging and positive.

Example interaction:
User: "กินอะไรดี 300 kcal?"
Coach: "ลอง 'ยำวุ้นเส้นอกไก่' ไหมคะ? 🌶️ ประมาณ 280 kcal เอง \
อร่อยแซ่บแถมโปรตีนสูงด้วยนะ! \
หรือจะเป็น 'โยเกิร์ตใส่ผลไม้' ก็สดชื่นดีค่ะ 🫐✨"
"""

COACH_GREETING = "สวัสดีค่ะ! โค้ชกะทิยินดีให้บริการ วันนี้ให้ช่วยคิดเมนูอะไรดีคะ? 🥗✨"
EMPTY_REPLY_TEXT = "ขออภัยค่ะ โค้ชกำลังมึนหัวนิดหน่อย ลองถามใหม่นะคะ 💫"
ERROR_REPLY_TEXT = "เกิดข้อผิดพลาดในการเชื่อมต่อ ลองใหม่อีกครั้งนะคะ 🥺"


class ChatClient(Protocol):
    """Interface for single-turn text generation."""

    async def generate(
        self, *, model: str, store: bool, instructions: str, message: str
    ) -> str | None:
        """Return the model's text reply, or None when it is empty."""


@dataclass
class CoachClient:
    """Asks the coach persona a question and never raises."""

    client: ChatClient
    model: str
    store: bool = False

    async def reply(self, message: str) -> CoachReply:
        """Return the coach's answer along with how it was produced."""
        try:
            text = await self.client.generate(
                model=self.model,
                store=self.store,
                instructions=COACH_INSTRUCTIONS,
                message=message,
            )
        except Exception:
            logger.exception("Coach request failed")
            return CoachReply(text=ERROR_REPLY_TEXT, status=ReplyStatus.ERROR)
        if not text:
            logger.warning("Coach returned an empty reply")
            return CoachReply(text=EMPTY_REPLY_TEXT, status=ReplyStatus.EMPTY)
        return CoachReply(text=text, status=ReplyStatus.OK)

    async def ask(self, message: str) -> str:
        """Return only the reply text."""
        return (await self.reply(message)).text


@dataclass
class CoachConversation:
    """Transcript held by the caller on behalf of the stateless coach."""

    messages: list[ChatMessage] = field(
        default_factory=lambda: [
            ChatMessage(id=uuid4().hex, text=COACH_GREETING, sender=Sender.COACH)
        ]
    )

    def add(self, text: str, sender: Sender) -> ChatMessage:
        message = ChatMessage(id=uuid4().hex, text=text, sender=sender)
        self.messages.append(message)
        return message
