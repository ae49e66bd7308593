"""Exceções de domínio do ledger de estatísticas"""


class LedgerError(Exception):
    """Erro base das operações de estatísticas"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Dados ausentes ou com tipo inválido; nada é escrito"""

    status_code = 400


class NotFoundError(LedgerError):
    """Partida, jogador ou participação inexistente"""

    status_code = 404


class ConflictError(LedgerError):
    """Violação de restrição reportada pelo banco durante a transação"""

    status_code = 409
