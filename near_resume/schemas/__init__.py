"""Schema exports."""

from .resume import Bullet, Education, Experience, Header, Resume, SkillGroup
from .session import ChatMessage, ResumeSession

__all__ = ["Resume", "Header", "SkillGroup", "Experience", "Bullet", "Education", "ChatMessage", "ResumeSession"]
