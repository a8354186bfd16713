import asyncio

import robespierre

# Whether the example should be ran as a user account or not
self_bot = False

client = robespierre.Client(
    token='token',
    bot=not self_bot,
    # Session tokens require ID of user they belong to
    user_id=robespierre.UserID('01HZ8Q5GQYB4V6ZCT7Y9DEXN2M') if self_bot else None,
)


@client.on(robespierre.ReadyEvent)
async def on_ready(_) -> None:
    print('Logged on as', client.me)


@client.on(robespierre.MessageCreateEvent)
async def on_message(event: robespierre.MessageCreateEvent):
    message = event.message

    # don't respond to ourselves/others
    if not client.me or (client.me.id != message.author_id) ^ self_bot:
        return

    if message.content == 'ping':
        async with client.typing(message.channel_id):
            await asyncio.sleep(1)
        await message.reply('pong')
    elif message.content == 'where':
        server = await message.resolve_server()
        await message.reply('Private channel' if server is None else f'In {server.name}')


@client.on(robespierre.MessageUpdateEvent)
async def on_message_update(event: robespierre.MessageUpdateEvent):
    if event.before is not None and event.after is not None:
        print(f'{event.message_id} edited: {event.before.content!r} -> {event.after.content!r}')


client.run()
