"""SQLAlchemy models for the helpdesk backend.

Every entity is keyed by `cod`, a uuid string generated on insert. Column names
follow the Portuguese domain vocabulary used by the API clients; the JSON layer
(`helpdesk.schemas`) exposes them in camelCase.

Models implemented:
- UtilizadorModel (users, the credential store)
- EmpresaModel, DepartamentoModel, FuncaoModel (reference data)
- TicketModel, AgendaModel, AnexoModel, ConversaModel
- AvaliacaoModel, ConfiguracaoModel, ContratoModel
- NotificacaoModel, PendenteModel, PerguntaFrequenteModel, RelatorioModel
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.database import Base


def _new_cod() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UtilizadorModel(Base):
    __tablename__ = "utilizadores"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    senha: Mapped[str] = mapped_column(String(255), nullable=False)
    nome: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    telefone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    genero: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_nascimento: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    empresa: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    departamento: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    funcao: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    tipo_utilizador: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    foto_perfil: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    termo_uso: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<Utilizador cod={self.cod} email={self.email} tipo={self.tipo_utilizador}>"


class EmpresaModel(Base):
    __tablename__ = "empresas"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    nome: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    nif: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    logo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    enderecos: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Empresa cod={self.cod} nome={self.nome}>"


class DepartamentoModel(Base):
    __tablename__ = "departamentos"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    nome: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Departamento cod={self.cod} nome={self.nome}>"


class FuncaoModel(Base):
    __tablename__ = "funcoes"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    nome: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Funcao cod={self.cod} nome={self.nome}>"


class TicketModel(Base):
    __tablename__ = "tickets"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_cliente: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    cod_tecnico: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    cod_empresa: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    assunto: Mapped[str] = mapped_column(String(255), nullable=False)
    descricao: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    prioridade: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    departamento: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    produto: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tipo_assistencia: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), index=True, nullable=True)
    data_prevista: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    data_executada: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    data_fecho: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, default=_utcnow)

    def __repr__(self) -> str:
        return f"<Ticket cod={self.cod} assunto={self.assunto} estado={self.estado}>"


class AgendaModel(Base):
    __tablename__ = "agendas"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_ticket: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    data: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    hora: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class AnexoModel(Base):
    __tablename__ = "anexos"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_ticket: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    anexo: Mapped[str] = mapped_column(Text, nullable=False)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class ConversaModel(Base):
    __tablename__ = "conversas"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_ticket: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    cod_utilizador: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    mensagem: Mapped[str] = mapped_column(Text, nullable=False)
    anexos: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class AvaliacaoModel(Base):
    __tablename__ = "avaliacoes"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_utilizador: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    avaliacao: Mapped[int] = mapped_column(Integer, nullable=False)
    comentario: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class ConfiguracaoModel(Base):
    __tablename__ = "configuracoes"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    logo_marca: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icone_marca: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cor_padrao: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    corbotao: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    cor_menu: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    som_notificacao: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class ContratoModel(Base):
    __tablename__ = "contratos"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_empresa: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    tipo_contratos: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    periodo_contrato: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    horas: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    horas_adicionais: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    descricao: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_inicio: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    data_fim: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class NotificacaoModel(Base):
    __tablename__ = "notificacoes"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_utilizador: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    assunto: Mapped[str] = mapped_column(String(255), nullable=False)
    descricao: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class PendenteModel(Base):
    __tablename__ = "pendentes"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_ticket: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    cod_relatorio: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    descricao: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    estado: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class PerguntaFrequenteModel(Base):
    __tablename__ = "perguntas_frequentes"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    pergunta: Mapped[str] = mapped_column(String(1000), nullable=False)
    resposta: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class RelatorioModel(Base):
    __tablename__ = "relatorios"

    cod: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_cod)
    cod_ticket: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    resolucao: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    hora_inicio: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    hora_fim: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    versao_sql: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    instancia: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    servidor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    n_postos: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    av_servidor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    av_postos: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bk_externo: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    resolucao_cliente: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tecnico_auxiliar: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    aprovacao: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    data_aprovacao: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, default=_utcnow)


__all__ = [
    "UtilizadorModel",
    "EmpresaModel",
    "DepartamentoModel",
    "FuncaoModel",
    "TicketModel",
    "AgendaModel",
    "AnexoModel",
    "ConversaModel",
    "AvaliacaoModel",
    "ConfiguracaoModel",
    "ContratoModel",
    "NotificacaoModel",
    "PendenteModel",
    "PerguntaFrequenteModel",
    "RelatorioModel",
]
