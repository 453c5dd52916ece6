"""
Example: Streaming chat over Bedrock

Credentials come from the environment (or a .env file):
BEDROCK_API_KEY for the Converse path, or AWS_ACCESS_KEY_ID and
AWS_SECRET_ACCESS_KEY for signed streaming calls.
"""

import asyncio

from bedrock_gateway import BedrockGateway, ContentDelta, ErrorChunk


async def example_streaming():
    """Print deltas as they arrive."""
    print("=== Streaming ===\n")

    async with BedrockGateway.from_env() as gateway:
        async for chunk in gateway.stream(
            [("user", "Write a haiku about Python programming")],
            "anthropic.claude-3-haiku-20240307-v1:0",
            system_prompt="You are a concise poet.",
            max_tokens=100,
        ):
            if isinstance(chunk, ContentDelta):
                print(chunk.text, end="", flush=True)
            elif isinstance(chunk, ErrorChunk):
                print(f"\n[{chunk.to_dict()['kind']}] {chunk.message}")
    print("\n")


async def example_conversation():
    """Drain a multi-turn Llama conversation into one result."""
    print("=== Conversation ===\n")

    async with BedrockGateway.from_env() as gateway:
        result = await gateway.complete(
            [
                ("user", "Name a prime number."),
                ("assistant", "7"),
                ("user", "Name a bigger one."),
            ],
            "meta.llama2-13b-chat-v1",
            temperature=0.2,
        )

    if result.ok:
        print(result.text)
    else:
        print(f"Failed: {result.error.message}")


async def main():
    await example_streaming()
    await example_conversation()


if __name__ == "__main__":
    asyncio.run(main())
