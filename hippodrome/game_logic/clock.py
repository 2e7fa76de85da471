import asyncio


class AsyncioClock:
    async def sleep(self, seconds):
        await asyncio.sleep(seconds)

    def now(self):
        return asyncio.get_running_loop().time()


class VirtualClock:
    """Gerçekte beklemeyen saat; testlerde tüm program anında koşulur.

    Her `sleep` zamanı ilerletir ve döngüye bir kez kontrol verir, böylece
    diğer görevler (ör. duraklatma komutu) araya girebilir.
    """

    def __init__(self, start=0.0):
        self.time = start
        self.sleeps = []

    async def sleep(self, seconds):
        self.time += seconds
        self.sleeps.append(seconds)
        await asyncio.sleep(0)

    def now(self):
        return self.time
