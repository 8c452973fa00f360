from openpgp_mime.models.address import MailboxAddress

ALICE = MailboxAddress(name="Alice", address="alice@example.com")
BOB = MailboxAddress(name="Bob", address="bob@example.com")
CAROL = MailboxAddress(name="Carol", address="carol@example.com")
MALLORY = MailboxAddress(name="Mallory", address="mallory@example.com")

CAROL_PASSPHRASE = "secret"

TEXT_BODY = "Hello Bob,\nthe meeting moved to Thursday.\n-- \nAlice\n"
