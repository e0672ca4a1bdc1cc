# models/__init__.py
from utils.db import Base  # re-export
from .familia import Familia
from .turno import Turno
from .setor import Setor
from .produto import Produto
from .producao import Producao
from .descarte import Descarte
