"""
Basic Usage Example

This example walks through the provider's resources:
- Storing events on an aggregate
- Reading the aggregate's feed page by page
- Registering a projection definition and reading the projection
- Registering a reaction

Requires SERIALIZED_ACCESS_KEY and SERIALIZED_SECRET_ACCESS_KEY.

Run with: python examples/basic_usage.py
"""

import asyncio
import logging
from uuid import uuid4

from serialized_client import (
    Action,
    ClientConfig,
    Event,
    EventHandler,
    Function,
    ProjectionDefinition,
    Reaction,
    SerializedClient,
    UnexpectedStatusError,
)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    async with SerializedClient(ClientConfig.from_env()) as client:
        # =====================================================================
        # Step 1: Store events
        # =====================================================================
        payment_id = str(uuid4())
        await client.aggregates.store(
            "payment",
            payment_id,
            [Event.new("PaymentProcessed", {"amount": 1000})],
            expected_version=0,
        )
        print(f"Stored payment {payment_id}")

        # =====================================================================
        # Step 2: Read the feed
        # =====================================================================
        head = await client.feeds.sequence_number("payment")
        print(f"payment feed is at sequence number {head}")

        async for entry in client.feeds.iter_entries("payment", since=max(head - 10, 0)):
            for event in entry.events:
                print(f"  #{entry.sequence_number} {event.event_type} {event.data}")

        # =====================================================================
        # Step 3: Projections
        # =====================================================================
        try:
            await client.projections.create_definition(
                ProjectionDefinition(
                    projection_name="payment-totals",
                    feed_name="payment",
                    handlers=[
                        EventHandler(
                            event_type="PaymentProcessed",
                            functions=[
                                Function(
                                    function="inc",
                                    target_selector="$.projection.count",
                                )
                            ],
                        )
                    ],
                )
            )
        except UnexpectedStatusError as e:
            # Already registered by an earlier run
            print(f"Definition not created: {e}")

        projection = await client.projections.get_single("payment-totals", payment_id)
        print(f"Projection for {payment_id}: {projection.data}")

        # =====================================================================
        # Step 4: Reactions
        # =====================================================================
        await client.reactions.create(
            Reaction(
                id=str(uuid4()),
                name="PaymentProcessedEmailReaction",
                feed="payment",
                event_type="PaymentProcessed",
                action=Action(
                    http_method="POST",
                    target_uri="https://example.com/webhooks/payments",
                    body="A new payment was processed",
                    action_type="HTTP",
                ),
            )
        )
        for reaction in await client.reactions.list():
            print(f"Reaction {reaction.name} on {reaction.feed}/{reaction.event_type}")


if __name__ == "__main__":
    asyncio.run(main())
