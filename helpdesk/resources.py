"""Resource descriptions for the helpdesk business entities.

Each entry is turned into endpoints by `helpdesk.crud.register_resource`
(protected group) and, for reference data, `register_reference_listing`
(public group). Users are handled separately in `helpdesk.routers`.
"""

from __future__ import annotations

from helpdesk import models, schemas
from helpdesk.crud import ALL_OPERATIONS, Filter, Resource, date_range

# Reference data is listed publicly; the protected group only manages it
MANAGED_ONLY = ALL_OPERATIONS - {"list"}

TICKETS = Resource(
    path="tickets",
    label="Ticket",
    model=models.TicketModel,
    create_schema=schemas.TicketCreate,
    update_schema=schemas.TicketUpdate,
    response_schema=schemas.TicketResponse,
    filters=(
        Filter("codCliente", "cod_cliente"),
        Filter("codTecnico", "cod_tecnico"),
        Filter("codEmpresa", "cod_empresa"),
        Filter("prioridade", "prioridade"),
        Filter("estado", "estado"),
        Filter("departamento", "departamento"),
        Filter("assunto", "assunto", "contains"),
        *date_range("data_criacao"),
    ),
    order_by="data_criacao",
    descending=True,
)

AGENDAS = Resource(
    path="agendas",
    label="Agenda",
    model=models.AgendaModel,
    create_schema=schemas.AgendaCreate,
    update_schema=schemas.AgendaUpdate,
    response_schema=schemas.AgendaResponse,
    filters=(
        Filter("codTicket", "cod_ticket"),
        Filter("estado", "estado"),
        *date_range("data"),
    ),
    order_by="data",
)

ANEXOS = Resource(
    path="anexos",
    label="Attachment",
    model=models.AnexoModel,
    create_schema=schemas.AnexoCreate,
    update_schema=schemas.AnexoUpdate,
    response_schema=schemas.AnexoResponse,
    filters=(Filter("codTicket", "cod_ticket"),),
    order_by="data_criacao",
    descending=True,
)

AVALIACOES = Resource(
    path="avaliacao",
    label="Evaluation",
    model=models.AvaliacaoModel,
    create_schema=schemas.AvaliacaoCreate,
    update_schema=schemas.AvaliacaoUpdate,
    response_schema=schemas.AvaliacaoResponse,
    filters=(Filter("codUtilizador", "cod_utilizador"),),
    order_by="data_criacao",
    descending=True,
)

CONFIGURACOES = Resource(
    path="configuracoes",
    label="Configuration",
    model=models.ConfiguracaoModel,
    create_schema=schemas.ConfiguracaoCreate,
    update_schema=schemas.ConfiguracaoUpdate,
    response_schema=schemas.ConfiguracaoResponse,
    filters=(Filter("estado", "estado"),),
)

CONTRATOS = Resource(
    path="contratos",
    label="Contract",
    model=models.ContratoModel,
    create_schema=schemas.ContratoCreate,
    update_schema=schemas.ContratoUpdate,
    response_schema=schemas.ContratoResponse,
    filters=(
        Filter("codEmpresa", "cod_empresa"),
        Filter("estado", "estado"),
    ),
    order_by="data_criacao",
    descending=True,
    paginated=True,
)

CONVERSAS = Resource(
    path="conversas",
    label="Conversation",
    model=models.ConversaModel,
    create_schema=schemas.ConversaCreate,
    update_schema=schemas.ConversaUpdate,
    response_schema=schemas.ConversaResponse,
    filters=(
        Filter("codTicket", "cod_ticket"),
        Filter("codUtilizador", "cod_utilizador"),
    ),
    order_by="data_criacao",
    paginated=True,
    # GET /conversas/{codTicket} lists a ticket's thread instead (see routers.private)
    operations=ALL_OPERATIONS - {"read"},
)

DEPARTAMENTOS = Resource(
    path="departamentos",
    label="Department",
    model=models.DepartamentoModel,
    create_schema=schemas.DepartamentoCreate,
    update_schema=schemas.DepartamentoUpdate,
    response_schema=schemas.DepartamentoResponse,
    order_by="nome",
    operations=MANAGED_ONLY,
    reference_schema=schemas.ReferenceItem,
    reference_filters=(Filter("nome", "nome", "contains"),),
)

EMPRESAS = Resource(
    path="empresas",
    label="Company",
    model=models.EmpresaModel,
    create_schema=schemas.EmpresaCreate,
    update_schema=schemas.EmpresaUpdate,
    response_schema=schemas.EmpresaResponse,
    order_by="nome",
    operations=MANAGED_ONLY,
    reference_schema=schemas.ReferenceItem,
    reference_filters=(
        Filter("nome", "nome", "contains"),
        Filter("nif", "nif", "contains"),
        Filter("endereco", "enderecos", "contains"),
    ),
)

FUNCOES = Resource(
    path="funcoes",
    label="Role",
    model=models.FuncaoModel,
    create_schema=schemas.FuncaoCreate,
    update_schema=schemas.FuncaoUpdate,
    response_schema=schemas.FuncaoResponse,
    order_by="nome",
    operations=MANAGED_ONLY,
    reference_schema=schemas.ReferenceItem,
    reference_filters=(Filter("nome", "nome", "contains"),),
)

NOTIFICACOES = Resource(
    path="notificacoes",
    label="Notification",
    model=models.NotificacaoModel,
    create_schema=schemas.NotificacaoCreate,
    update_schema=schemas.NotificacaoUpdate,
    response_schema=schemas.NotificacaoResponse,
    filters=(
        Filter("codUtilizador", "cod_utilizador"),
        Filter("estado", "estado"),
    ),
    order_by="data_criacao",
    descending=True,
)

PENDENTES = Resource(
    path="pendentes",
    label="Pending item",
    model=models.PendenteModel,
    create_schema=schemas.PendenteCreate,
    update_schema=schemas.PendenteUpdate,
    response_schema=schemas.PendenteResponse,
    filters=(
        Filter("codTicket", "cod_ticket"),
        Filter("estado", "estado"),
    ),
    order_by="data_criacao",
    descending=True,
)

PERGUNTAS_FREQUENTES = Resource(
    path="perguntas-frequentes",
    label="FAQ",
    model=models.PerguntaFrequenteModel,
    create_schema=schemas.PerguntaFrequenteCreate,
    update_schema=schemas.PerguntaFrequenteUpdate,
    response_schema=schemas.PerguntaFrequenteResponse,
    filters=(Filter("pergunta", "pergunta", "contains"),),
)

RELATORIOS = Resource(
    path="relatorios",
    label="Report",
    model=models.RelatorioModel,
    create_schema=schemas.RelatorioCreate,
    update_schema=schemas.RelatorioUpdate,
    response_schema=schemas.RelatorioResponse,
    filters=(Filter("codTicket", "cod_ticket"),),
    order_by="data_criacao",
    descending=True,
    paginated=True,
)

PROTECTED_RESOURCES = (
    TICKETS,
    AGENDAS,
    ANEXOS,
    AVALIACOES,
    CONFIGURACOES,
    CONTRATOS,
    CONVERSAS,
    DEPARTAMENTOS,
    EMPRESAS,
    FUNCOES,
    NOTIFICACOES,
    PENDENTES,
    PERGUNTAS_FREQUENTES,
    RELATORIOS,
)

REFERENCE_RESOURCES = (EMPRESAS, DEPARTAMENTOS, FUNCOES)

__all__ = [
    "PROTECTED_RESOURCES",
    "REFERENCE_RESOURCES",
    "CONVERSAS",
]
