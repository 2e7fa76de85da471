import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from hippodrome.config import CORS_ORIGINS
from hippodrome.game_logic.models import (
    Horse,
    HorseStanding,
    RaceRound,
    RoundResult,
    SessionSnapshot,
)
from hippodrome.game_logic.orchestrator import RaceOrchestrator

logger = logging.getLogger(__name__)


# ==========================================
# CANLI YAYIN (WEBSOCKET) YÖNETİCİSİ
# ==========================================
class ConnectionManager:
    def __init__(self):
        self.connections = []
        self.outbox = asyncio.Queue()

    async def connect(self, websocket: WebSocket, snapshot: SessionSnapshot):
        # Önce anlık görüntü, sonra canlı olaylar
        await websocket.send_json({"type": "snapshot", **snapshot.model_dump(mode="json")})
        self.connections.append(websocket)
        logger.info("Spectator connected (%d watching)", len(self.connections))

    def disconnect(self, websocket: WebSocket):
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info("Spectator left (%d watching)", len(self.connections))

    def notify(self, event: str, payload: dict):
        # Orkestratör beklemeden devam eder, sıra kuyrukta korunur
        self.outbox.put_nowait({"type": event, **payload})

    async def pump(self):
        while True:
            message = await self.outbox.get()
            try:
                await self.broadcast(message)
            except Exception:
                logger.exception("Broadcast of %s failed", message.get("type"))

    async def broadcast(self, message: dict):
        for connection in list(self.connections):
            try:
                await connection.send_json(message)
            except (WebSocketDisconnect, RuntimeError) as exc:
                logger.warning("Dropping spectator after failed send: %s", exc)
                self.disconnect(connection)


# ==========================================
# UYGULAMA
# ==========================================
def create_app(race=None):
    race = race or RaceOrchestrator()
    manager = ConnectionManager()
    race.add_listener(manager.notify)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager.outbox = asyncio.Queue()
        pump_task = asyncio.create_task(manager.pump())
        try:
            yield
        finally:
            await race.close()
            pump_task.cancel()
            try:
                await pump_task
            except asyncio.CancelledError:
                pass

    app = FastAPI(title="Hippodrome", lifespan=lifespan)
    app.state.race = race
    app.state.manager = manager
    app.add_middleware(CORSMiddleware, allow_origins=CORS_ORIGINS, allow_credentials=False, allow_methods=["*"], allow_headers=["*"])

    # ==========================================
    # HTTP API (DURUM VE KOMUTLAR)
    # ==========================================
    @app.get("/api/state", response_model=SessionSnapshot)
    def get_state():
        return race.snapshot()

    @app.get("/api/horses", response_model=List[Horse])
    def get_horses():
        return race.horses

    @app.get("/api/program", response_model=List[RaceRound])
    def get_program():
        return race.program

    @app.get("/api/program/{round_number}", response_model=RaceRound)
    def get_round(round_number: int):
        if not 1 <= round_number <= len(race.program):
            raise HTTPException(status_code=404, detail="Böyle bir koşu bulunamadı!")
        return race.program[round_number - 1]

    @app.get("/api/results", response_model=List[RoundResult])
    def get_results():
        return race.results

    @app.get("/api/standings", response_model=List[HorseStanding])
    def get_standings():
        return race.standings()

    @app.post("/api/program", response_model=SessionSnapshot)
    async def generate_program():
        await race.generate_program()
        return race.snapshot()

    @app.post("/api/race/toggle", response_model=SessionSnapshot)
    async def toggle_race():
        await race.toggle_race()
        return race.snapshot()

    @app.post("/api/race/reset", response_model=SessionSnapshot)
    async def reset_race():
        await race.reset()
        return race.snapshot()

    # ==========================================
    # WEBSOCKET (CANLI YARIŞ)
    # ==========================================
    @app.websocket("/ws/race")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket.accept()
        await manager.connect(websocket, race.snapshot())
        try:
            while True:
                try:
                    client_data = await websocket.receive_json()
                except json.JSONDecodeError:
                    await websocket.send_json({"type": "error", "message": "Geçersiz JSON mesajı"})
                    continue
                action = client_data.get("action") if isinstance(client_data, dict) else None

                if action == "generate_program":
                    await race.generate_program()
                elif action == "toggle_race":
                    await race.toggle_race()
                elif action == "reset":
                    await race.reset()
                else:
                    await websocket.send_json({"type": "error", "message": f"Bilinmeyen komut: {action}"})

        except WebSocketDisconnect:
            pass
        finally:
            manager.disconnect(websocket)

    return app


app = create_app()
