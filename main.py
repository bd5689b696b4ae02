from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Dict, List
import logging
import os
import threading
import time
import uuid

from console import BufferedConsole
from errors import BasicError, QuitSignal
from session import BasicSession

logger = logging.getLogger(__name__)

app = FastAPI(title="Minimal BASIC Interpreter", version="1.0.0")

# Limites do servidor; um RUN não pode prender a thread indefinidamente.
MAX_STEPS = int(os.environ.get("BASIC_MAX_STEPS", "100000"))
MAX_SESSIONS = int(os.environ.get("BASIC_MAX_SESSIONS", "100"))
SESSION_TTL = float(os.environ.get("BASIC_SESSION_TTL", "3600"))

sessions: Dict[str, BasicSession] = {}
last_seen: Dict[str, float] = {}
sessions_lock = threading.Lock()

# --- Modelos de Dados ---
class LineRequest(BaseModel):
    line: str
    inputs: List[str] = []

class RunRequest(BaseModel):
    inputs: List[str] = []

class CodeRequest(BaseModel):
    code: str
    inputs: List[str] = []

# --- Lógica Auxiliar ---

def new_session() -> BasicSession:
    return BasicSession(BufferedConsole(), max_steps=MAX_STEPS)

def evict_sessions():
    """Remove sessões ociosas e, acima do limite, as menos usadas."""
    now = time.monotonic()
    for session_id in [sid for sid, seen in last_seen.items() if now - seen > SESSION_TTL]:
        drop_session(session_id)
        logger.info("sessão %s expirada", session_id)
    while sessions and len(sessions) >= MAX_SESSIONS:
        oldest = min(last_seen, key=last_seen.get)
        drop_session(oldest)
        logger.info("sessão %s descartada (limite de sessões)", oldest)

def drop_session(session_id: str):
    sessions.pop(session_id, None)
    last_seen.pop(session_id, None)

def get_session(session_id: str) -> BasicSession:
    with sessions_lock:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"Sessão {session_id} não encontrada")
        last_seen[session_id] = time.monotonic()
        return session

def execute(session: BasicSession, action, inputs: List[str]) -> dict:
    """Executa uma ação da sessão com entrada pré-definida e devolve a saída."""
    console = BufferedConsole(inputs)
    session.console = console
    try:
        action()
    except BasicError as e:
        return {"success": False, "output": console.lines, "error": e.message}
    return {"success": True, "output": console.lines, "error": None}

# --- Endpoints da API ---
# Handlers síncronos: o FastAPI os executa no threadpool, fora do event loop.
@app.post("/api/sessions")
def create_session():
    session_id = str(uuid.uuid4())
    with sessions_lock:
        evict_sessions()
        sessions[session_id] = new_session()
        last_seen[session_id] = time.monotonic()
    logger.info("sessão %s criada", session_id)
    return {"session_id": session_id}

@app.delete("/api/sessions/{session_id}")
def delete_session(session_id: str):
    get_session(session_id)
    with sessions_lock:
        drop_session(session_id)
    logger.info("sessão %s encerrada", session_id)
    return {"success": True}

@app.post("/api/sessions/{session_id}/lines")
def submit_line(session_id: str, request: LineRequest):
    session = get_session(session_id)
    try:
        return execute(session, lambda: session.process_line(request.line), request.inputs)
    except QuitSignal:
        with sessions_lock:
            drop_session(session_id)
        logger.info("sessão %s encerrada por QUIT", session_id)
        return {"success": True, "output": [], "error": None, "closed": True}

@app.get("/api/sessions/{session_id}/program")
def get_program(session_id: str):
    session = get_session(session_id)
    return {"lines": [{"number": number, "source": source} for number, source in session.list_lines()]}

@app.post("/api/sessions/{session_id}/run")
def run_program(session_id: str, request: RunRequest):
    session = get_session(session_id)
    return execute(session, session.run, request.inputs)

@app.post("/api/run")
def run_code(request: CodeRequest):
    """Carrega todas as linhas do código e executa o programa de uma vez."""
    session = new_session()
    lines = [line.strip() for line in request.code.strip().split('\n') if line.strip()]
    for line in lines:
        try:
            session.process_line(line)
        except BasicError as e:
            return {"success": False, "output": [], "error": f"{line}: {e.message}"}
        except QuitSignal:
            break
    return execute(session, session.run, request.inputs)

@app.get("/api/examples")
async def get_examples():
    return {
        "sum": {"name": "Soma", "code": "10 REM Soma de dois numeros\n20 INPUT A\n30 INPUT B\n40 LET C = A + B\n50 PRINT C\n60 END"},
        "comparison": {"name": "Maior de dois", "code": "10 REM Compara qual numero e maior\n20 INPUT A\n30 INPUT B\n40 IF A > B THEN 70\n50 PRINT B\n60 GOTO 80\n70 PRINT A\n80 END"},
        "countdown": {"name": "Contagem regressiva", "code": "10 LET N = 5\n20 PRINT N\n30 LET N = N - 1\n40 IF N > 0 THEN 20\n50 END"},
    }
