"""Spring Boot application.properties generation."""

import logging
from pathlib import Path

from schemaseed.bootstrap.credentials import Credentials

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"


def jdbc_url(credentials: Credentials, host: str = DEFAULT_HOST) -> str:
    return (
        f"jdbc:mysql://{host}:{credentials.port}/{credentials.database}"
        f"?useSSL=false&serverTimezone=UTC"
    )


def render_application_properties(credentials: Credentials, log_dir: str, host: str = DEFAULT_HOST) -> str:
    """Render datasource, JPA, connection pool and logging settings.

    Args:
        credentials: Credentials the container was started with
        log_dir: Directory the application should write its logs to
        host: Database host as seen by the application
    """
    return f"""spring.datasource.url={jdbc_url(credentials, host)}
spring.datasource.username=root
spring.datasource.password={credentials.root_password}
spring.datasource.driver-class-name=com.mysql.cj.jdbc.Driver

# JPA / Hibernate Settings
spring.jpa.database-platform=org.hibernate.dialect.MySQL8Dialect
spring.jpa.show-sql=false
spring.jpa.hibernate.ddl-auto=none
spring.jpa.properties.hibernate.format_sql=true
spring.jpa.properties.hibernate.use_sql_comments=false
spring.jpa.properties.hibernate.jdbc.lob.non_contextual_creation=true

# Connection Pool Configuration
spring.datasource.hikari.minimum-idle=5
spring.datasource.hikari.maximum-pool-size=20
spring.datasource.hikari.idle-timeout=30000
spring.datasource.hikari.max-lifetime=1800000
spring.datasource.hikari.connection-timeout=20000
spring.datasource.hikari.pool-name=MyHikariCP

# Logging Configuration
logging.level.root=INFO
logging.level.org.springframework.web=INFO
logging.level.org.hibernate.SQL=DEBUG
logging.file.path={log_dir}
logging.file.name={log_dir}/application.log
logging.pattern.console=%d{{yyyy-MM-dd HH:mm:ss}} - %msg%n
logging.pattern.file=%d{{yyyy-MM-dd HH:mm:ss}} [%thread] %-5level %logger{{36}} - %msg%n
"""


def write_application_properties(path: Path, credentials: Credentials, log_dir: str) -> Path:
    """Write application.properties and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_application_properties(credentials, log_dir))
    logger.info("Application properties written to %s", path)
    return path
