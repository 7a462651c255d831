"""Minimal console demo of the weather chatbot."""

import asyncio

from weather_chat.api.service import run_weather_chat


async def main() -> None:
    print("Ask me about weather or say hi... (empty line to quit)")
    while True:
        text = input("You: ")
        if not text.strip():
            break
        result = await run_weather_chat(text)
        print("Bot:", result["bot_message"]["text"])


if __name__ == "__main__":
    asyncio.run(main())
