"""Pydantic schemas for the helpdesk API.

Field names are snake_case in Python and camelCase on the wire (`cod_ticket` is
sent and received as `codTicket`); both spellings are accepted on input.

Each entity has three shapes built from one base class holding every optional
field:
- `<Entity>Create`: body of POST, re-declares the fields required on creation
- `<Entity>Update`: body of PUT, every field optional, only supplied fields apply
- `<Entity>Response`: what the API returns (adds `cod` and `dataCriacao`)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # Naive values are taken as UTC so range filters compare like with like
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class _Record(CamelModel):
    cod: str
    data_criacao: Optional[UTCDateTime] = None


class ReferenceItem(CamelModel):
    """Reduced shape used by the public reference listings."""

    cod: str
    nome: str


# ----------------------------- Auth ----------------------------------
class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    senha: str = Field(..., min_length=1)


class TokenClaims(CamelModel):
    """Identity facts embedded in an access token."""

    id: str
    email: str
    tipo_utilizador: Optional[str] = None
    foto: Optional[str] = None
    empresa: Optional[str] = None
    funcao: Optional[str] = None


class LoginUser(CamelModel):
    cod: str
    nome: Optional[str] = None
    email: str
    tipo_utilizador: Optional[str] = None
    foto: Optional[str] = None
    empresa: Optional[str] = None
    funcao: Optional[str] = None


class LoginResponse(CamelModel):
    message: str
    token: str
    user: LoginUser


# ----------------------------- Utilizadores --------------------------
class _UtilizadorBase(CamelModel):
    nome: Optional[str] = None
    telefone: Optional[str] = None
    genero: Optional[str] = None
    data_nascimento: Optional[UTCDateTime] = None
    empresa: Optional[str] = None
    departamento: Optional[str] = None
    funcao: Optional[str] = None
    tipo_utilizador: Optional[str] = None
    foto_perfil: Optional[str] = None
    termo_uso: Optional[bool] = None
    estado: Optional[str] = None


class UtilizadorCreate(_UtilizadorBase):
    email: EmailStr
    senha: str = Field(..., min_length=1)


class UtilizadorUpdate(_UtilizadorBase):
    email: Optional[EmailStr] = None
    senha: Optional[str] = Field(None, min_length=1)


class UtilizadorResponse(_UtilizadorBase, _Record):
    # no `senha`: the hash is never serialized
    email: str


class TiposUtilizadoresResponse(BaseModel):
    tipos: List[str]


# ----------------------------- Empresas ------------------------------
class _EmpresaBase(CamelModel):
    nome: Optional[str] = Field(None, max_length=255)
    nif: Optional[str] = Field(None, max_length=32)
    logo: Optional[str] = None
    enderecos: Optional[str] = None


class EmpresaCreate(_EmpresaBase):
    nome: str = Field(..., min_length=1, max_length=255)


class EmpresaUpdate(_EmpresaBase):
    pass


class EmpresaResponse(_EmpresaBase, _Record):
    pass


# ----------------------------- Departamentos / Funcoes ----------------
class _NomeBase(CamelModel):
    nome: Optional[str] = Field(None, max_length=255)


class DepartamentoCreate(_NomeBase):
    nome: str = Field(..., min_length=1, max_length=255)


class DepartamentoUpdate(_NomeBase):
    pass


class DepartamentoResponse(_NomeBase, _Record):
    pass


class FuncaoCreate(_NomeBase):
    nome: str = Field(..., min_length=1, max_length=255)


class FuncaoUpdate(_NomeBase):
    pass


class FuncaoResponse(_NomeBase, _Record):
    pass


# ----------------------------- Tickets -------------------------------
class _TicketBase(CamelModel):
    cod_cliente: Optional[str] = None
    cod_tecnico: Optional[str] = None
    cod_empresa: Optional[str] = None
    assunto: Optional[str] = Field(None, max_length=255)
    descricao: Optional[str] = None
    prioridade: Optional[str] = None
    departamento: Optional[str] = None
    produto: Optional[str] = None
    tipo_assistencia: Optional[str] = None
    estado: Optional[str] = None
    data_prevista: Optional[UTCDateTime] = None
    data_executada: Optional[UTCDateTime] = None
    data_fecho: Optional[UTCDateTime] = None


class TicketCreate(_TicketBase):
    assunto: str = Field(..., min_length=1, max_length=255)


class TicketUpdate(_TicketBase):
    pass


class TicketResponse(_TicketBase, _Record):
    pass


# ----------------------------- Agendas -------------------------------
class _AgendaBase(CamelModel):
    cod_ticket: Optional[str] = None
    data: Optional[UTCDateTime] = None
    hora: Optional[str] = Field(None, max_length=16)
    estado: Optional[str] = None


class AgendaCreate(_AgendaBase):
    cod_ticket: str = Field(..., min_length=1)
    data: UTCDateTime


class AgendaUpdate(_AgendaBase):
    pass


class AgendaResponse(_AgendaBase, _Record):
    pass


# ----------------------------- Anexos --------------------------------
class _AnexoBase(CamelModel):
    cod_ticket: Optional[str] = None
    anexo: Optional[str] = None


class AnexoCreate(_AnexoBase):
    cod_ticket: str = Field(..., min_length=1)
    anexo: str = Field(..., min_length=1)


class AnexoUpdate(_AnexoBase):
    pass


class AnexoResponse(_AnexoBase, _Record):
    pass


# ----------------------------- Conversas -----------------------------
class _ConversaBase(CamelModel):
    cod_ticket: Optional[str] = None
    cod_utilizador: Optional[str] = None
    mensagem: Optional[str] = None
    anexos: Optional[str] = None


class ConversaCreate(_ConversaBase):
    cod_ticket: str = Field(..., min_length=1)
    mensagem: str = Field(..., min_length=1)


class ConversaUpdate(_ConversaBase):
    pass


class ConversaResponse(_ConversaBase, _Record):
    pass


# ----------------------------- Avaliacao -----------------------------
class _AvaliacaoBase(CamelModel):
    cod_utilizador: Optional[str] = None
    avaliacao: Optional[int] = None
    comentario: Optional[str] = None


class AvaliacaoCreate(_AvaliacaoBase):
    avaliacao: int


class AvaliacaoUpdate(_AvaliacaoBase):
    pass


class AvaliacaoResponse(_AvaliacaoBase, _Record):
    pass


# ----------------------------- Configuracoes -------------------------
class _ConfiguracaoBase(CamelModel):
    logo_marca: Optional[str] = None
    icone_marca: Optional[str] = None
    cor_padrao: Optional[str] = None
    corbotao: Optional[str] = None
    cor_menu: Optional[str] = None
    som_notificacao: Optional[str] = None
    estado: Optional[str] = None


class ConfiguracaoCreate(_ConfiguracaoBase):
    pass


class ConfiguracaoUpdate(_ConfiguracaoBase):
    pass


class ConfiguracaoResponse(_ConfiguracaoBase, _Record):
    pass


# ----------------------------- Contratos -----------------------------
class _ContratoBase(CamelModel):
    cod_empresa: Optional[str] = None
    tipo_contratos: Optional[str] = None
    periodo_contrato: Optional[str] = None
    horas: Optional[float] = None
    horas_adicionais: Optional[float] = None
    descricao: Optional[str] = None
    data_inicio: Optional[UTCDateTime] = None
    data_fim: Optional[UTCDateTime] = None
    estado: Optional[str] = None


class ContratoCreate(_ContratoBase):
    pass


class ContratoUpdate(_ContratoBase):
    pass


class ContratoResponse(_ContratoBase, _Record):
    pass


# ----------------------------- Notificacoes --------------------------
class _NotificacaoBase(CamelModel):
    cod_utilizador: Optional[str] = None
    assunto: Optional[str] = Field(None, max_length=255)
    descricao: Optional[str] = None
    estado: Optional[str] = None


class NotificacaoCreate(_NotificacaoBase):
    assunto: str = Field(..., min_length=1, max_length=255)


class NotificacaoUpdate(_NotificacaoBase):
    pass


class NotificacaoResponse(_NotificacaoBase, _Record):
    pass


# ----------------------------- Pendentes -----------------------------
class _PendenteBase(CamelModel):
    cod_ticket: Optional[str] = None
    cod_relatorio: Optional[str] = None
    descricao: Optional[str] = None
    estado: Optional[str] = None


class PendenteCreate(_PendenteBase):
    pass


class PendenteUpdate(_PendenteBase):
    pass


class PendenteResponse(_PendenteBase, _Record):
    pass


# ----------------------------- Perguntas frequentes ------------------
class _PerguntaFrequenteBase(CamelModel):
    pergunta: Optional[str] = Field(None, max_length=1000)
    resposta: Optional[str] = None


class PerguntaFrequenteCreate(_PerguntaFrequenteBase):
    pergunta: str = Field(..., min_length=1, max_length=1000)


class PerguntaFrequenteUpdate(_PerguntaFrequenteBase):
    pass


class PerguntaFrequenteResponse(_PerguntaFrequenteBase, _Record):
    pass


# ----------------------------- Relatorios ----------------------------
class _RelatorioBase(CamelModel):
    cod_ticket: Optional[str] = None
    resolucao: Optional[str] = None
    hora_inicio: Optional[UTCDateTime] = None
    hora_fim: Optional[UTCDateTime] = None
    versao_sql: Optional[str] = None
    instancia: Optional[str] = None
    servidor: Optional[str] = None
    n_postos: Optional[int] = None
    av_servidor: Optional[str] = None
    av_postos: Optional[str] = None
    bk_externo: Optional[str] = None
    resolucao_cliente: Optional[str] = None
    tecnico_auxiliar: Optional[str] = None
    aprovacao: Optional[str] = None
    data_aprovacao: Optional[UTCDateTime] = None


class RelatorioCreate(_RelatorioBase):
    cod_ticket: str = Field(..., min_length=1)


class RelatorioUpdate(_RelatorioBase):
    pass


class RelatorioResponse(_RelatorioBase, _Record):
    pass
