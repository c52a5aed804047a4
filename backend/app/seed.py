"""Seed the database with a sample project covering every question type."""

import logging
import uuid

from app.core.database import SessionLocal
from app.models import Project
from app.services.projects import build_question, generate_link

logger = logging.getLogger(__name__)

DEMO_OWNER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")

SEED_QUESTIONS = [
    {"question_text": "Qual a probabilidade de você nos recomendar a um amigo?", "question_type": "nps"},
    {"question_text": "Quão satisfeito você está com o atendimento?", "question_type": "csat"},
    {"question_text": "Foi fácil resolver o seu problema?", "question_type": "ces", "scale_config": {"cesScale": 5}},
    {"question_text": "Avalie a qualidade do produto", "question_type": "stars"},
    {"question_text": "Como você se sente sobre a entrega?", "question_type": "emojis"},
    {"question_text": "Quanto você gostou da embalagem?", "question_type": "hearts", "scale_config": {"maxValue": 3}},
    {"question_text": "Você gostou da nova interface?", "question_type": "like_dislike"},
    {
        "question_text": "Como você nos conheceu?",
        "question_type": "single_choice",
        "scale_config": {"options": ["Instagram", "Google", "Indicação", "Outro"]},
    },
    {
        "question_text": "Quais recursos você usa?",
        "question_type": "multiple_choice",
        "scale_config": {"options": ["Relatórios", "Kanban", "Resumo IA", "Exportação"], "maxSelections": 2},
    },
    {"question_text": "O produto atende às minhas necessidades", "question_type": "likert"},
    {
        "question_text": "Avalie cada aspecto",
        "question_type": "matrix",
        "scale_config": {"matrixRows": ["Velocidade", "Qualidade"], "matrixColumns": ["Ruim", "Ok", "Bom"]},
    },
    {"question_text": "Deixe um comentário", "question_type": "text", "scale_config": {"isRequired": False}},
]


def seed() -> None:
    db = SessionLocal()
    try:
        existing = db.query(Project).filter(Project.owner_id == DEMO_OWNER_ID).first()
        if existing:
            logger.info("Demo project already exists (%s), skipping", existing.link_unique)
            return

        project = Project(
            owner_id=DEMO_OWNER_ID,
            name="Pesquisa de Satisfação (Demo)",
            description="Projeto de demonstração com todos os tipos de pergunta",
            public_title="Conte-nos sua experiência",
            link_unique=generate_link(),
        )
        project.questions = [
            build_question(q["question_text"], q["question_type"], q.get("scale_config"), order_index=i)
            for i, q in enumerate(SEED_QUESTIONS)
        ]
        db.add(project)
        db.commit()
        logger.info("Seeded demo project %s with %d questions", project.link_unique, len(project.questions))
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
