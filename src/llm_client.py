from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from dotenv import load_dotenv
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You convert descriptions of reporting time windows into JSON. Reply with JSON only."

CompletionClient = Callable[..., str]


@dataclass
class LLMConfig:
    """
    統一管理環境變數 key 與模型參數，避免散落在程式各處。
    """
    # ===== 環境變數 key（.env 裡會提供）=====
    base_url_key: str = "LLM_BASE_URL"
    model_key: str = "LLM_MODEL"
    api_key_key: str = "LLM_API_KEY"

    # ===== 模型參數 =====
    # JSON 補全需要穩定輸出
    temperature: float = 0.0

    input_key: str = "input"


def _get_env_or_die(key: str) -> str:
    """
    讀取環境變數；若缺少則輸出報錯並直接結束程式。
    """
    val = os.getenv(key)
    if not val:
        logger.error("Missing environment variable %r, please check your .env file.", key)
        print(f"[Env error]: Missing environment variable '{key}', please check your .env file.")
        sys.exit(1)
    return val


def build_llm(cfg: LLMConfig, timeout_seconds: Optional[int] = None) -> ChatOpenAI:
    """
    建立 LLM 連線設定（ChatOpenAI），依賴 .env 提供 base_url / model / api_key。
    """
    return ChatOpenAI(
        model=_get_env_or_die(cfg.model_key),
        base_url=_get_env_or_die(cfg.base_url_key),
        api_key=_get_env_or_die(cfg.api_key_key),
        temperature=cfg.temperature,
        timeout=timeout_seconds,
    )


def build_chain(llm: ChatOpenAI, cfg: LLMConfig):
    """
    prompt | llm 的管線：system 固定規則，human 為組好的補全 prompt。
    """
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", SYSTEM_PROMPT),
            ("human", "{" + cfg.input_key + "}"),
        ]
    )
    return prompt | llm


def make_completion_client(chain, cfg: Optional[LLMConfig] = None) -> CompletionClient:
    """
    包裝成 llm_enricher 需要的 `client(prompt, timeout=...) -> str` 介面。
    """
    cfg = cfg or LLMConfig()

    def _client(prompt: str, timeout: Optional[int] = None) -> str:
        del timeout  # the timeout is fixed on the ChatOpenAI instance
        out = chain.invoke({cfg.input_key: prompt})
        return out.content

    return _client


def build_completion_client(
    cfg: Optional[LLMConfig] = None,
    *,
    load_env: bool = True,
    timeout_seconds: Optional[int] = None,
) -> CompletionClient:
    cfg = cfg or LLMConfig()
    if load_env:
        load_dotenv()
    llm = build_llm(cfg, timeout_seconds=timeout_seconds)
    return make_completion_client(build_chain(llm, cfg), cfg)
