from enum import Enum

# =====================================================
# 🧱 CADASTROS
# =====================================================
class AtivoEnum(str, Enum):
    sim = "SIM"
    nao = "NAO"


# =====================================================
# 🔌 CLIENTE
# =====================================================
class ConnectionStatusEnum(str, Enum):
    connecting = "connecting"
    connected = "connected"
    disconnected = "disconnected"


class NotificationKindEnum(str, Enum):
    info = "info"
    success = "success"
    error = "error"
