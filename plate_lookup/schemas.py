from pydantic import BaseModel, Field


class VehicleOut(BaseModel):
    marca: str | None
    modelo: str | None
    importado: str | None
    ano: str | None
    anoModelo: str | None
    cor: str | None
    cilindrada: str | None
    potencia: str | None
    combustivel: str | None
    chassi: str | None
    motor: str | None
    passageiros: str | None
    uf: str | None
    municipio: str | None


class ResultOut(BaseModel):
    data: VehicleOut | None = None
    erros: list[str] = Field(default_factory=list)


class MemoryOut(BaseModel):
    used: str
    total: str


class HealthOut(BaseModel):
    status: str
    uptime: int
    timestamp: str
    memory: MemoryOut
