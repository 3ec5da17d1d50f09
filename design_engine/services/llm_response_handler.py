"""
LLM Response Handler - reduce provider completion payloads to plain text
"""

import logging
from typing import Any, Dict, List, Union

logger = logging.getLogger(__name__)


class LLMResponseHandler:
    """
    Turn provider completion payloads into the text the parsers consume
    """

    # Block/part types that never carry answer text
    EXCLUDED_PARTS = [
        'thinking',
        'redacted_thinking',
        'thought',
        'tool_use',
        'metadata',
        'debug_info'
    ]

    @staticmethod
    def filter_response(response: Union[str, List, Dict, Any]) -> str:
        """
        Collect the text parts of a completion payload

        Args:
            response: a string, a list of content parts/blocks, a single part
                dict, or an SDK content block object

        Returns:
            Concatenated text
        """
        if isinstance(response, str):
            return response

        if isinstance(response, dict):
            return LLMResponseHandler._filter_part(response.get("type"), response.get("text"))

        if isinstance(response, list):
            return LLMResponseHandler._filter_list_response(response)

        # SDK objects (e.g. anthropic TextBlock) expose .type and .text
        if hasattr(response, "type"):
            return LLMResponseHandler._filter_part(getattr(response, "type", None), getattr(response, "text", None))

        return str(response)

    @staticmethod
    def _filter_part(part_type: Any, text: Any) -> str:
        if part_type in LLMResponseHandler.EXCLUDED_PARTS:
            logger.debug(f"Skipping non-text component: {part_type}")
            return ""
        return text if isinstance(text, str) else ""

    @staticmethod
    def _filter_list_response(response_list: List) -> str:
        text_parts = []

        for item in response_list:
            filtered = LLMResponseHandler.filter_response(item)
            if filtered.strip():
                text_parts.append(filtered)

        return ''.join(text_parts)

    @staticmethod
    def handle_response(response: Any, log_warnings: bool = True) -> str:
        """
        Main entry point for handling completion payloads

        Args:
            response: Raw provider content
            log_warnings: Whether to log warnings about filtered components

        Returns:
            Cleaned text response ("" when there is no text at all)
        """
        if not response:
            return ""

        non_text_parts = LLMResponseHandler._detect_non_text_parts(response)

        if non_text_parts and log_warnings:
            logger.warning(
                f"Detected non-text parts in LLM response: {non_text_parts}. "
                f"These will be filtered out."
            )

        filtered_text = LLMResponseHandler.filter_response(response)

        if not filtered_text.strip():
            logger.warning("After filtering, response contains no text content")
            return ""

        logger.debug(f"LLM response filtered and cleaned ({len(filtered_text)} chars)")
        return filtered_text.strip()

    @staticmethod
    def _detect_non_text_parts(response: Any) -> List[str]:
        """Detect which excluded part types are in the response"""
        if not isinstance(response, list):
            return []

        detected = set()
        for item in response:
            part_type = item.get("type") if isinstance(item, dict) else getattr(item, "type", None)
            if part_type in LLMResponseHandler.EXCLUDED_PARTS:
                detected.add(part_type)

        return sorted(detected)

    @staticmethod
    def clean_code_fences(text: str) -> str:
        """Remove a wrapping markdown code block if present"""
        text = text.strip()

        if text.startswith("```json"):
            text = text[7:]
        elif text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]

        return text.strip()
