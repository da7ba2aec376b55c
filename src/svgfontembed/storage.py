from contextlib import contextmanager
from logging import getLogger
import os
from tempfile import TemporaryFile
from urllib.parse import urlparse, urljoin
from urllib.request import urlopen, Request
from urllib.error import URLError


logger = getLogger(__name__)


def get_storage(dirname, **kwargs):
    result = urlparse(dirname)
    if result.scheme in ('http', 'https'):
        return UrlStorage(dirname, **kwargs)
    elif result.scheme == 'file':
        return FileSystemStorage(result.path, **kwargs)
    # Anything else is a local path, even with a colon in it.
    return FileSystemStorage(dirname, **kwargs)


def split_location(path):
    """Split a file path or URL into a storage location and a key."""
    if urlparse(path).scheme in ('http', 'https'):
        base, _, key = path.rpartition('/')
        return base + '/', key
    return os.path.split(path)


class _BaseStorage(object):
    def open(self, key):
        raise NotImplementedError

    def get(self, key):
        raise NotImplementedError

    def exists(self, key):
        raise NotImplementedError

    def put(self, key, value):
        raise NotImplementedError

    def url(self, path=''):
        raise NotImplementedError


class FileSystemStorage(_BaseStorage):
    def __init__(self, path):
        self.basedir = path
        if not self.basedir:
            self.basedir = '.'

    def _ensure_dir(self, dirname):
        if dirname and not os.path.exists(dirname):
            logger.debug('Creating {}'.format(dirname))
            os.makedirs(dirname)

    @contextmanager
    def open(self, filename, mode='rb'):
        path = os.path.join(self.basedir, filename)
        if mode.startswith('w'):
            self._ensure_dir(os.path.dirname(path))
        with open(path, mode) as f:
            yield f

    def get(self, filename, mode='rb'):
        with self.open(filename, mode=mode) as f:
            return f.read()

    def exists(self, filename):
        return os.path.isfile(os.path.join(self.basedir, filename))

    def put(self, filename, value, mode='wb'):
        with self.open(filename, mode=mode) as f:
            f.write(value)

    def url(self, path=''):
        return os.path.abspath(os.path.join(self.basedir, path))


class UrlStorage(_BaseStorage):
    """Read-only storage over http(s)."""

    def __init__(self, base_url, **kwargs):
        self.base_url = base_url

    @contextmanager
    def open(self, path, **kwargs):
        url = self.url(path)
        with TemporaryFile() as f:
            with urlopen(url, **kwargs) as response:
                f.write(response.read())
            f.seek(0)
            yield f

    def get(self, path, **kwargs):
        with self.open(path, **kwargs) as f:
            return f.read()

    def exists(self, path):
        request = Request(self.url(path), method='HEAD')
        try:
            with urlopen(request):
                return True
        except URLError as e:
            logger.debug('HEAD {} failed: {}'.format(request.full_url, e))
            return False

    def put(self, path, value):
        raise NotImplementedError('UrlStorage is read-only')

    def url(self, path=''):
        return urljoin(self.base_url, path)
