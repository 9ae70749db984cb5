# oceanofgigs/config.py

from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

DEFAULT_SKILL_CATALOG = [
    "Web Development", "UI/UX Design", "Graphic Design", "JavaScript", "React",
    "Node.js", "Python", "Content Writing", "Social Media", "SEO", "Marketing",
    "Copywriting", "Data Analysis", "Figma", "Adobe XD", "MongoDB", "Flutter",
    "Mobile Development", "CSS", "HTML", "Tailwind CSS", "TypeScript",
]

class Settings(BaseSettings):
    # --- Core ---
    APP_NAME: str = "Ocean of Gigs"
    DEBUG: bool = False

    # passlib scheme used for stored user passwords
    PASSWORD_HASH_SCHEME: str = "pbkdf2_sha256"

    # --- Seed data ---
    SEED_DEFAULT_SKILLS: bool = True
    DEFAULT_SKILLS: List[str] = Field(default_factory=lambda: list(DEFAULT_SKILL_CATALOG))

    # --- HTTP ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field("json", description="json or console")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
