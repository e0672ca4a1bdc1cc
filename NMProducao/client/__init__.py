from client.api_client import ApiClient, ApiError, ApiTimeout
from client.config import ClientConfig
from client.sync import SyncReport, SyncState, TaskResult, connect, run_task_group
