import asyncio

from kinpy import KinesisClient, KinesisConfiguration, ListStreams

# Credentials come from the usual AWS environment variables or shared config
config = KinesisConfiguration.from_env()


async def main():
    async with KinesisClient(config=config) as client:
        # Everything at once
        names = await client.list_streams(limit=10)
        print(names)

        # Page by page, keeping the request needed to resume later
        async for page in client.pages(ListStreams(limit=10)):
            print(page.number, page.items)
            if page.next_request is not None:
                print("resume with", page.next_request.exclusive_start_stream_name)


asyncio.run(main())
