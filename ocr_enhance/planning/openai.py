"""
Planners backed by an OpenAI Responses API endpoint.

Both planners send a fixed system instruction plus the user prompt and
read a single JSON object back out of the model's text output.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ocr_enhance.config import PlannerConfig, settings
from ocr_enhance.exceptions import PlannerError
from ocr_enhance.imaging.base import OperationKind
from ocr_enhance.planning.base import PromptPlanner, RunOptionsPlanner
from ocr_enhance.planning.responses import json_from_response, load_json_object
from ocr_enhance.schemas.options import RunOptions
from ocr_enhance.schemas.plan import EnhancementPlan

logger = logging.getLogger(__name__)

PLAN_INSTRUCTION = f"""You are a planner for an OCR image enhancement tool.
Return ONLY valid JSON with shape:
{{
  "variants": [
    {{ "name": "short_name", "steps": [ {{ "op": "operation", "params": {{ ... }} }} ] }}
  ]
}}
Operations allowed: {", ".join(OperationKind.names())}.
Rules:
- If prompt requests ranges (start/end/step), generate multiple variants accordingly.
- Never exceed the end bound (no overshoot).
- Keep variant names short and unique.
"""

OPTIONS_INSTRUCTION = """You are a planner for an OCR runner. Return ONLY valid JSON with this exact shape:
{
  "runEnhancement": true|false,
  "includeOriginal": true|false,
  "saveTxt": true|false,
  "saveJson": true|false,
  "language": "eng"
}

Defaults:
- runEnhancement=false
- includeOriginal=true
- saveTxt=true
- saveJson=true
- language="eng"
"""


class OpenAIResponsesClient:
    """
    Minimal client for the Responses API.

    Args:
        api_key: Bearer token. When None, it is read from the environment
            on each request (see Settings.planner_api_key).
        config: Endpoint, model and timeout.
        client: Optional shared httpx.AsyncClient; a short-lived one is
            created per request when omitted.
    """

    def __init__(
        self,
        api_key: str | None = None,
        config: PlannerConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.config = config or settings.planner
        self._client = client

    def _payload(self, instruction: str, prompt: str, json_mode: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "input": [
                {"role": "system", "content": instruction},
                {"role": "user", "content": prompt},
            ],
        }
        if json_mode:
            payload["text"] = {"format": {"type": "json_object"}}
        return payload

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> httpx.Response:
        api_key = self.api_key or settings.planner_api_key
        return await client.post(
            self.config.endpoint,
            json=payload,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    async def complete_json(self, instruction: str, prompt: str, json_mode: bool = False) -> str:
        """
        Send one request and return the JSON object found in the output text.

        Raises:
            PlannerError: On a non-success status or a response without JSON.
            ConfigurationError: If no API key is available.
            httpx.HTTPError: On transport failures.
        """
        payload = self._payload(instruction, prompt, json_mode)

        if self._client is not None:
            response = await self._post(self._client, payload)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                response = await self._post(client, payload)

        if not response.is_success:
            raise PlannerError(
                f"Planning call failed: {response.status_code} {response.reason_phrase}\n{response.text}"
            )

        try:
            body = response.json()
        except json.JSONDecodeError as e:
            raise PlannerError(f"Planner response is not JSON: {e}")

        return json_from_response(body)


class OpenAIPromptPlanner(PromptPlanner):
    """Asks the model for an enhancement plan."""

    def __init__(self, client: OpenAIResponsesClient):
        self.client = client

    async def get_plan(self, prompt: str) -> EnhancementPlan:
        plan_json = await self.client.complete_json(PLAN_INSTRUCTION, prompt)

        try:
            plan = EnhancementPlan.model_validate(load_json_object(plan_json))
        except ValidationError as e:
            raise PlannerError(f"Planner returned an invalid plan: {e}\nExtracted JSON:\n{plan_json}")

        if plan.is_empty:
            raise PlannerError(f"Planner returned no variants. Extracted JSON:\n{plan_json}")

        logger.info(f"Planner returned {len(plan.variants)} variants")
        return plan


class OpenAIRunOptionsPlanner(RunOptionsPlanner):
    """Asks the model for run options as a JSON object."""

    def __init__(self, client: OpenAIResponsesClient):
        self.client = client

    async def get_options(self, prompt: str) -> RunOptions:
        options_json = await self.client.complete_json(OPTIONS_INSTRUCTION, prompt, json_mode=True)

        try:
            return RunOptions.model_validate(load_json_object(options_json))
        except ValidationError as e:
            raise PlannerError(f"Planner returned invalid options: {e}\nExtracted JSON:\n{options_json}")
