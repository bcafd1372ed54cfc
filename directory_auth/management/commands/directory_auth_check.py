from django.core.management.base import BaseCommand, CommandError
from directory_auth.auth import authenticate, AuthResultType
from directory_auth.config.settings import DirectoryAuthSettings
from directory_auth.exceptions.auth import DirectoryAuthError
from getpass import getpass


class Command(BaseCommand):
	help = "Runs one directory authentication attempt with the current settings"

	def add_arguments(self, parser):
		parser.add_argument("account_name", help="Account name as entered on the login page")
		parser.add_argument(
			"--password",
			help="Password to authenticate with, prompted for when omitted",
		)

	def handle(self, *args, **options):
		account_name = options["account_name"]
		password = options.get("password") or getpass("Password: ")
		try:
			settings = DirectoryAuthSettings.from_django().validate()
			self.stdout.write(
				"Mode: %s | Server: %s:%s"
				% (settings.LDAP_AUTH_MODE, settings.LDAP_AUTH_URL, settings.LDAP_AUTH_PORT)
			)
			result = authenticate(account_name, password, settings=settings)
		except DirectoryAuthError as e:
			raise CommandError("%s: %s" % (e.default_code, e.message))
		finally:
			del password

		if result.type == AuthResultType.FALLBACK:
			self.stdout.write(
				self.style.WARNING("Email login deferred to local credentials (fallback).")
			)
			return
		self.stdout.write(self.style.SUCCESS("Authenticated %s" % account_name))
		self.stdout.write("\tName: %s" % result.name)
		self.stdout.write("\tEmail: %s" % result.email)
		self.stdout.write("\tCreate account: %s" % result.create_account)
