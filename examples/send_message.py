import os
import sys
import asyncio
from sendly import SendlyClient, SendMessageRequest, is_authentication_error, is_insufficient_credits_error, is_rate_limit_error, SendlyError

# Load credentials from environment variables
SENDLY_API_KEY = os.getenv('SENDLY_API_KEY')
RECIPIENT = os.getenv('SENDLY_TO', '+15005550006')

if not SENDLY_API_KEY:
    raise ValueError("Environment variable SENDLY_API_KEY must be set")


async def send_and_check():
    """Send one message, then look it up again and show the account balance"""
    async with SendlyClient(SENDLY_API_KEY, debug=True) as client:
        try:
            message = await client.messages.send(SendMessageRequest(to=RECIPIENT, text="Hello from Sendly"))
        except SendlyError as e:
            if is_authentication_error(e):
                print("Check SENDLY_API_KEY")
            elif is_insufficient_credits_error(e):
                print("Top up your credits first")
            elif is_rate_limit_error(e):
                print(f"Rate limited, retry after {e.retry_after} seconds")
            else:
                print(f"Send failed: {e}")
            sys.exit(1)

        print(f"Message ID: {message.id}, Status: {message.status}, Sandbox: {message.is_sandbox}")
        message = await client.messages.get(message.id)
        print(f"Current status: {message.status}")

        credits = await client.account.get_credits()
        print(f"Balance: {credits.balance} (available {credits.available_balance})")

if __name__ == "__main__":
    asyncio.run(send_and_check())
