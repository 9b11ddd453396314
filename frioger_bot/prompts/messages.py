"""
Customer-facing and specialist-facing message texts.

All outbound wording lives here so the engine only decides *which*
message to send. Business-specific values are passed in from
configuration, not read from module globals.
"""

from frioger_bot.config import BusinessConfig
from frioger_bot.schemas.catalog_schema import CatalogMatch

DIVIDER = "━━━━━━━━━━━━━━━━━━"

NAME_INVALID = "⚠️ Por favor, digite um nome válido para continuarmos."

GOODBYE_ANONYMOUS = "Atendimento encerrado. Obrigado!"

HUMAN_HANDOFF_NOTICE = (
    "🔔 *Entendido.* Estou transferindo você para a fila prioritária de atendimento humano.\n\n"
    "🕒 *Aguarde um instante, logo alguém irá te responder!*"
)

HANDOFF_REASON_MENU = "Falar com Especialista (Menu)"

CATALOG_SENDING = "📄 *Perfeito!* Estou enviando o catálogo para você...\n\n⏳ _Só um instante..._"

CATALOG_UNAVAILABLE = "⚠️ Ocorreu um erro ao carregar o arquivo. Notifiquei o suporte."

CATEGORY_PROMPT = f"""📁 *Selecione a Categoria Desejada:*

{DIVIDER}

❄️  *Climatização*
_(Splits, Cassette, Piso Teto)_

🧊  *Refrigeração*
_(Geladeiras, Freezers, Cervejeiras)_

🏠  *Eletrodomésticos*
_(Lava e Seca, Air Fryers, Fornos)_

{DIVIDER}

✍️  _*Digite o nome do produto que você procura:*_"""

PARTS_PROMPT = """⚙️  *Peças Genuínas Midea & Carrier*

Para agilizar, precisamos do modelo exato.

📸  *Por favor, envie uma FOTO DA ETIQUETA do aparelho ou digite o código da peça.*

_Um técnico verificará nosso estoque imediatamente._"""

SUPPORT_PROMPT = """🛠️  *Suporte Técnico Especializado*

📝  *Descreva brevemente qual é o equipamento e o que está acontecendo:*

_Exemplo: "Ar condicionado Midea pingando" ou "Geladeira não gela"._"""

OPTION_NOT_RECOGNIZED = (
    "❌ Opção não reconhecida. Por favor, digite um número do menu ou o nome de um produto."
)

RATING_THANKS_WARM = "🤩 Uau! Ficamos muito felizes em saber. Obrigado pela preferência!"

CHAT_CLOSED_FOOTER = "\n\n_Atendimento Encerrado._"

MEDIA_RECEIVED = "📷 _O cliente enviou uma mídia (foto/vídeo/arquivo)._"

FALLBACK_NAME = "visitante"


def render_main_menu(display_name: str) -> str:
    """Main menu text greeting the customer by name."""
    return f"""✨ É um prazer ter você aqui, *{display_name}*!

Como posso te ajudar hoje? 🤝
_Digite o NÚMERO de uma opção ou o NOME de um produto._

{DIVIDER}

🛒 *ÁREA COMERCIAL*

1️⃣  Baixar Catálogo em PDF (Completo 2026)
2️⃣  Ver Produtos por Categoria
3️⃣  Cotação de Peças Originais

{DIVIDER}

🛠️ *SUPORTE & SERVIÇOS*

4️⃣  Solicitar Instalação ou Manutenção
5️⃣  Dúvidas Técnicas / Defeitos

{DIVIDER}

👤 *ATENDIMENTO*

6️⃣  Falar com Especialista
0️⃣  Encerrar Conversa"""


def welcome_message(business: BusinessConfig) -> str:
    return (
        f"👋 Olá! Seja muito bem-vindo(a) ao *{business.name}*. ❄️\n"
        f"_{business.tagline}_\n\n"
        "🤖 Sou seu assistente virtual inteligente.\n\n"
        "Para iniciarmos, por favor, digite seu *NOME* abaixo: 👇"
    )


def rating_prompt(display_name: str) -> str:
    return (
        f"*Foi um prazer atender você, {display_name}!*\n\n"
        "Para nos ajudar a melhorar, que nota você dá para este atendimento?\n"
        "(De 1 a 5)"
    )


def rating_thanks(business: BusinessConfig, warm: bool) -> str:
    if warm:
        text = RATING_THANKS_WARM
    else:
        text = f"🤝 Obrigado pelo seu feedback! O {business.name} agradece o contato."
    return text + CHAT_CLOSED_FOOTER


def catalog_caption(display_name: str, business: BusinessConfig) -> str:
    return (
        f"✅ *Aqui está, {display_name}!*\n\n"
        f"📘 *{business.catalog_title} - {business.name}*\n\n"
        "👀 Dê uma olhada nas novidades. Se gostar de algo, é só me dizer o nome do produto aqui no chat!"
    )


def product_card(match: CatalogMatch) -> str:
    """Structured reply describing a catalog hit."""
    lines = [
        "❄️ *Encontrei este produto para você:*",
        "",
        f"📦 *{match.item.name}*",
        f"📝 _{match.item.description}_",
        "",
    ]
    if match.item.tech_specs:
        lines.append("⚙️ *Especificações:*")
        lines.extend(f"• {spec}" for spec in match.item.tech_specs)
    lines.append("")
    lines.append(f"📂 *Categoria:* {match.category} - {match.sub}")
    lines.append("")
    lines.append(
        "💬 *Deseja falar com um vendedor sobre este item?* "
        "Digite 6 para falar com um especialista."
    )
    return "\n".join(lines)


def ticket_acknowledgement(display_name: str) -> str:
    return (
        f"✅ *Recebido, {display_name}.*\n\n"
        "📝 Sua solicitação foi registrada.\n\n"
        "👨‍🔧 Nossa equipe técnica analisará e retornará o contato neste mesmo chat em breve.\n\n"
        "_Enquanto um de nossos especialistas analisa sua solicitação, nosso atendimento "
        "automático será pausado. Para retornar ao menu principal a qualquer momento, "
        "basta digitar *#menu*._"
    )


def handoff_alert(display_name: str, reason: str, link: str) -> str:
    return (
        "🚨 *ALERTA DE ATENDIMENTO* 🚨\n\n"
        f"👤 *Cliente:* {display_name}\n"
        f"📂 *Solicitação:* {reason}\n"
        f"📱 *Link direto:* {link}\n\n"
        "_O cliente está aguardando na fila._"
    )


def ticket_alert(display_name: str, product: str, report: str, link: str) -> str:
    return (
        "🛠️ *NOVO CHAMADO TÉCNICO* 🛠️\n\n"
        f"👤 *Cliente:* {display_name}\n"
        f"❄️ *Possível Produto:* {product}\n"
        f'📝 *Relato:* "{report}"\n'
        f"📱 *Link:* {link}"
    )


def relay_message(display_name: str, text: str, has_media: bool, link: str) -> str:
    """Wrap a customer message for the specialist's inbox."""
    body = MEDIA_RECEIVED if has_media else f'_"{text}"_'
    return (
        f"💬 *Nova mensagem do cliente* ({display_name}):\n\n"
        f"{body}\n\n"
        f"🔗 *Responder:* {link}"
    )
