"""
Demo of OpenCatClient with the rich printers.

Set OPENCAT_TOKEN (or put it in .env) before running.
"""
import asyncio
from typing import List
from rich.console import Console
from opencat import OpenCatClient, Message, RichPrinter, RichStreamPrinter

console = Console()


async def demo_chat(client: OpenCatClient, messages: List[Message]):
    console.print("[bold cyan]=== Chat (claude-instant-v1) ===")
    resp = await client.chat({
        "model": "claude-instant-v1",
        "temperature": 1,
        "max_tokens": 500,
        "messages": messages,
    })
    RichPrinter().print_chat(resp)


async def demo_stream(client: OpenCatClient, messages: List[Message]):
    console.print("[bold cyan]=== Stream (gpt-3.5-turbo) ===")
    event_stream = client.astream({
        "model": "gpt-3.5-turbo",
        "temperature": 0.7,
        "max_tokens": 500,
        "stream": True,
        "messages": messages,
    })
    printer = RichStreamPrinter(title="Markdown Demo", code_theme="dracula", refresh_rate=40)
    await printer.print_stream(event_stream)


async def main():
    messages: List[Message] = [
        {"role": "system", "content": "You are a concise assistant."},
        {"role": "user", "content": "introduce yourself in one sentence using markdown syntax."},
    ]

    async with OpenCatClient() as client:
        await demo_chat(client, messages)
        await demo_stream(client, messages)

        for record in await client.usage():
            console.print(f"[dim]{record.get('product')}[/dim]: {record.get('usage')}")


if __name__ == "__main__":
    asyncio.run(main())
