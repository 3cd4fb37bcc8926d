import json
from typing import Any

import httpx

from migraine_weather_alert.prediction.exceptions import PredictionError
from migraine_weather_alert.prediction.models import (
    ObservedWeather,
    PredictionContext,
    RiskPrediction,
)

SYSTEM_PROMPT = """You are an advanced migraine prediction system. Analyze weather data and user profile to predict migraine risk.

Return a JSON response with:
- riskLevel: number (1-10 scale)
- confidence: number (0-1)
- factors: array of contributing factors
- recommendation: string with actionable advice
- timeframe: predicted timeframe for potential migraine"""


class ChatPredictionClient:
    """Client for an OpenAI-compatible chat completions endpoint.

    Raises PredictionError when the request fails or the reply is not the
    expected JSON object.
    """

    BASE_URL = "https://api.openai.com"
    COMPLETIONS_ENDPOINT = "/v1/chat/completions"
    MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.model = model or self.MODEL
        self.timeout = timeout

    def build_request(self, weather: ObservedWeather, context: PredictionContext) -> dict[str, Any]:
        user_prompt = (
            f"Weather: {json.dumps(weather.to_dict())}\n"
            f"User Profile: Weather sensitivity: {context.sensitivity.value}, "
            f"Known triggers: {', '.join(context.known_triggers)}, "
            f"Recent episodes: {context.recent_episodes}\n\n"
            "Predict migraine risk for the next 24-48 hours."
        )
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": 500,
            "temperature": 0.3,
        }

    async def predict(self, weather: ObservedWeather, context: PredictionContext) -> RiskPrediction:
        url = f"{self.base_url}{self.COMPLETIONS_ENDPOINT}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    json=self.build_request(weather, context),
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise PredictionError(f"Prediction request failed: {exc}") from exc

        return self._parse_reply(data, weather)

    def _parse_reply(self, data: Any, weather: ObservedWeather) -> RiskPrediction:
        try:
            content = data["choices"][0]["message"]["content"]
            payload = json.loads(content)
            return RiskPrediction(
                risk_level=int(payload["riskLevel"]),
                confidence=float(payload["confidence"]),
                factors=tuple(str(f) for f in payload.get("factors", ())),
                recommendation=str(payload["recommendation"]),
                timeframe=str(payload.get("timeframe", "Next 24 hours")),
                weather=weather,
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise PredictionError(f"Unparseable prediction reply: {exc}") from exc
